from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, send_from_directory, session

from config import get_settings_module

from .common.http import current_role, handle_domain_errors, login_required
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_employees, list_tables
from .ledger.controller import register as register_ledger
from .payroll.controller import register as register_payroll
from .payroll.storage import parse_slip_key

_logger = logging.getLogger(__name__)


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    _logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            _logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_employees(db_config)
        container = build_container(db_config=db_config, settings=settings)

    slip_dir = Path(getattr(settings, "SLIP_STORAGE_DIR", "var/slips")).resolve()

    @app.route("/slips/<path:key>", endpoint="slip_download")
    @login_required
    @handle_domain_errors
    def slip_download(key: str):
        employee_id, period = parse_slip_key(key)
        # same ownership rule as the payslip JSON view
        container.payroll_service.get_payslip(
            current_role=current_role(),
            current_employee_id=str(session["user_id"]),
            employee_id=employee_id,
            period=period,
        )
        return send_from_directory(slip_dir, key, as_attachment=True)

    register_payroll(app, container)
    register_ledger(app, container)

    return app
