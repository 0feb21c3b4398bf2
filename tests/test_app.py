import pytest

import config.testing as testing_settings
from src.payroll_system.payroll_system.container import build_services
from src.payroll_system.payroll_system.main import create_app
from src.payroll_system.payroll_system.payroll.model import EmployeeProfile
from src.payroll_system.payroll_system.payroll.storage import LocalSlipStorage


@pytest.fixture
def app(monkeypatch, payslips, make_employees, storage):
    monkeypatch.setenv("APP_ENV", "testing")
    employees = make_employees(
        [
            EmployeeProfile("EMP-001", "Alice", "Engineering", 5000),
            EmployeeProfile("EMP-002", "Bob", "Engineering", None),
            EmployeeProfile("EMP-003", "Carla", "HR", 3000),
        ]
    )
    container = build_services(payslips_repo=payslips, employees_repo=employees, slip_storage=storage)
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, user_id="admin", role="admin"):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


FORM = {
    "employeeId": "EMP-003",
    "employeeName": "Carla",
    "department": "HR",
    "month": "2026-03",
    "baseSalary": "3000",
    "taxRate": "10",
}


def test_admin_routes_require_login(client):
    assert client.get("/api/ledger/summary").status_code == 401
    assert client.post("/api/payroll/payslips", json=FORM).status_code == 401


def test_employee_cannot_use_admin_routes(client):
    _login(client, user_id="EMP-003", role="employee")

    resp = client.post("/api/payroll/payslips", json=FORM)

    assert resp.status_code == 403
    assert resp.get_json() == {"success": False, "message": "Permission denied"}


def test_preview_does_not_store(client, payslips):
    _login(client)

    resp = client.post("/api/payroll/preview", json=FORM)

    assert resp.status_code == 200
    assert resp.get_json()["payslip"]["net_salary"] == 2700.0
    assert payslips.list() == []


def test_generate_payslip_then_employee_reads_it(client, storage):
    _login(client)
    resp = client.post("/api/payroll/payslips", json=FORM)

    assert resp.status_code == 201
    body = resp.get_json()["payslip"]
    assert body["tax"] == 300.0
    assert body["net_salary_display"] == "$2,700.00"
    assert body["slip_url"] == "https://files.example/salary_slips/EMP-003_2026-03.txt"
    assert "salary_slips/EMP-003_2026-03.txt" in storage.uploads

    _login(client, user_id="EMP-003", role="employee")
    assert client.get("/api/payroll/payslips/EMP-003/2026-03").status_code == 200
    assert client.get("/api/payroll/payslips/EMP-001/2026-03").status_code == 403


def test_invalid_form_is_bad_request(client):
    _login(client)

    resp = client.post("/api/payroll/payslips", json={**FORM, "baseSalary": ""})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "base salary required"


def test_missing_payslip_is_not_found(client):
    _login(client)

    assert client.get("/api/payroll/payslips/EMP-001/2025-01").status_code == 404


def test_bulk_reports_rejected_employees(client):
    _login(client)

    resp = client.post("/api/payroll/bulk", json={"department": "Engineering", "month": "2026-03", "bonus": "100"})

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["success"] is False
    assert [p["employee_id"] for p in body["payslips"]] == ["EMP-001"]
    assert body["errors"] == [{"index": 1, "employee_id": "EMP-002", "message": "base salary required"}]


def test_bulk_unknown_department(client):
    _login(client)

    resp = client.post("/api/payroll/bulk", json={"department": "Legal", "month": "2026-03"})

    assert resp.status_code == 404


def test_ledger_summary_history_and_export(client, payslips, make_record):
    payslips.save(make_record(1500, employee_id="EMP-003", department="HR", month="2026-01"))
    payslips.save(make_record(2500, employee_id="EMP-001", month="2026-01"))
    _login(client)

    summary = client.get("/api/ledger/summary?department=HR&year=2026&window=6").get_json()["summary"]
    assert summary["total_paid"] == 1500.0
    assert summary["department_totals"] == {"HR": 1500.0}
    assert len(summary["monthly_trend"]) == 6

    everything = client.get("/api/ledger/summary?department=all&year=bogus").get_json()["summary"]
    assert everything["total_paid"] == 4000.0
    assert everything["processed_slips"] == 2

    export = client.get("/admin/ledger.csv")
    assert export.status_code == 200
    assert export.mimetype == "text/csv"
    lines = export.data.decode("utf-8-sig").splitlines()
    assert lines[0].startswith("month,employee_id")
    assert len(lines) == 3

    _login(client, user_id="EMP-003", role="employee")
    history = client.get("/api/ledger/history?year=2026").get_json()["history"]
    assert history["total_earned"] == 1500.0
    assert history["monthly"][0] == {"month": "Jan", "total": 1500.0}


def test_unsafe_employee_id_is_bad_request(client, payslips):
    _login(client)

    resp = client.post("/api/payroll/payslips", json={**FORM, "employeeId": "../../x"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert payslips.list() == []


@pytest.fixture
def slip_client(monkeypatch, tmp_path, payslips, employees):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(testing_settings, "SLIP_STORAGE_DIR", str(tmp_path))
    container = build_services(
        payslips_repo=payslips,
        employees_repo=employees,
        slip_storage=LocalSlipStorage(tmp_path),
    )
    return create_app(container=container).test_client()


def test_employee_downloads_only_own_slip(slip_client):
    _login(slip_client)
    created = slip_client.post("/api/payroll/payslips", json=FORM)
    assert created.status_code == 201
    assert created.get_json()["payslip"]["slip_url"] == "/slips/salary_slips/EMP-003_2026-03.txt"

    _login(slip_client, user_id="EMP-003", role="employee")
    own = slip_client.get("/slips/salary_slips/EMP-003_2026-03.txt")
    assert own.status_code == 200
    assert own.data.startswith(b"COMPANY NAME\nSALARY SLIP")
    own.close()

    _login(slip_client, user_id="EMP-001", role="employee")
    other = slip_client.get("/slips/salary_slips/EMP-003_2026-03.txt")
    assert other.status_code == 403
    assert other.get_json() == {"success": False, "message": "Permission denied"}


def test_admin_slip_download_checks_key_and_existence(slip_client):
    _login(slip_client)

    assert slip_client.get("/slips/notes.txt").status_code == 400
    assert slip_client.get("/slips/salary_slips/EMP-001_2026-03.txt").status_code == 404


def test_slip_download_requires_login(slip_client):
    assert slip_client.get("/slips/salary_slips/EMP-003_2026-03.txt").status_code == 401
