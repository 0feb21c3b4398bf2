from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.http import admin_required, current_role, handle_domain_errors, login_required
from ..container import Container
from .model import PayPeriod, PayrollRules, PayslipInput
from .service import payslip_to_ui


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        if request.is_json:
            return request.get_json(silent=True) or {}
        return request.form.to_dict()

    @app.route("/api/payroll/preview", methods=["POST"], endpoint="api_payroll_preview")
    @admin_required
    @handle_domain_errors
    def api_payroll_preview():
        record = container.payroll_service.preview(PayslipInput.from_form(_payload()))
        return jsonify({"success": True, "payslip": payslip_to_ui(record)})

    @app.route("/api/payroll/payslips", methods=["POST"], endpoint="api_payroll_generate")
    @admin_required
    @handle_domain_errors
    def api_payroll_generate():
        record = container.payroll_service.generate_payslip(
            current_role=current_role(),
            payslip=PayslipInput.from_form(_payload()),
        )
        return jsonify({"success": True, "payslip": payslip_to_ui(record)}), 201

    @app.route("/api/payroll/bulk", methods=["POST"], endpoint="api_payroll_bulk")
    @admin_required
    @handle_domain_errors
    def api_payroll_bulk():
        data = _payload()
        result = container.payroll_service.process_department(
            current_role=current_role(),
            department=data.get("department") or "",
            period=PayPeriod.parse(data.get("month")),
            rules=PayrollRules.from_form(data),
        )
        return jsonify(
            {
                "success": result.ok,
                "payslips": [payslip_to_ui(r) for r in result.records],
                "errors": [
                    {"index": e.index, "employee_id": e.employee_id, "message": e.message} for e in result.errors
                ],
            }
        )

    @app.route("/api/payroll/payslips", methods=["GET"], endpoint="api_payroll_list")
    @admin_required
    @handle_domain_errors
    def api_payroll_list():
        month = request.args.get("month")
        rows = container.payroll_service.list_payslips(
            department=request.args.get("department") or "all",
            period=PayPeriod.parse(month) if month else None,
            search=request.args.get("q") or "",
        )
        return jsonify({"success": True, "payslips": [payslip_to_ui(r) for r in rows]})

    @app.route("/api/payroll/payslips/<employee_id>/<month>", methods=["GET"], endpoint="api_payroll_get")
    @login_required
    @handle_domain_errors
    def api_payroll_get(employee_id: str, month: str):
        record = container.payroll_service.get_payslip(
            current_role=current_role(),
            current_employee_id=str(session["user_id"]),
            employee_id=employee_id,
            period=PayPeriod.parse(month),
        )
        return jsonify({"success": True, "payslip": payslip_to_ui(record)})
