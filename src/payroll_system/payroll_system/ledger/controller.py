from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.http import admin_required, handle_domain_errors, login_required
from ..container import Container
from .model import LedgerFilter
from .service import EXPORT_FIELDS, history_to_ui, summary_to_ui


def register(app: Flask, container: Container) -> None:
    def _filter_from_args() -> LedgerFilter:
        return LedgerFilter.parse(request.args.get("department"), request.args.get("year"))

    def _write_ledger_csv(*, rows: list[dict], filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/ledger/summary", methods=["GET"], endpoint="api_ledger_summary")
    @admin_required
    @handle_domain_errors
    def api_ledger_summary():
        window = request.args.get("window", type=int)
        summary = container.ledger_service.dashboard(_filter_from_args(), window_months=window)
        return jsonify({"success": True, "summary": summary_to_ui(summary)})

    @app.route("/api/ledger/history", methods=["GET"], endpoint="api_ledger_history")
    @login_required
    @handle_domain_errors
    def api_ledger_history():
        year = request.args.get("year", type=int) or now_local().year
        history = container.ledger_service.history(employee_id=str(session["user_id"]), year=year)
        return jsonify({"success": True, "history": history_to_ui(history)})

    @app.route("/admin/ledger.csv", methods=["GET"], endpoint="admin_ledger_csv")
    @admin_required
    def admin_ledger_csv():
        ledger_filter = _filter_from_args()
        rows = container.ledger_service.export_rows(ledger_filter)
        filename = f"payroll_{ledger_filter.department}_{ledger_filter.year}.csv".replace(" ", "_")
        return _write_ledger_csv(rows=rows, filename=filename)
