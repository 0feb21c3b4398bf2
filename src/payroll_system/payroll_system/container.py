from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_COMPANY_NAME, DEFAULT_TREND_WINDOW_MONTHS
from .database.connection import DBConfig, DatabaseConnection
from .ledger.service import LedgerReportService
from .payroll.mysql_employee_repository import MySQLEmployeeRepository
from .payroll.mysql_payslip_repository import MySQLPayslipRepository
from .payroll.repository import EmployeeRepository, PayslipRepository
from .payroll.service import PayrollService
from .payroll.storage import LocalSlipStorage, SlipStorage


@dataclass(frozen=True)
class Container:
    payslips_repo: PayslipRepository
    employees_repo: EmployeeRepository
    slip_storage: SlipStorage

    payroll_service: PayrollService
    ledger_service: LedgerReportService


def build_services(
    *,
    payslips_repo: PayslipRepository,
    employees_repo: EmployeeRepository,
    slip_storage: SlipStorage,
    company_name: str = DEFAULT_COMPANY_NAME,
    window_months: int = DEFAULT_TREND_WINDOW_MONTHS,
) -> Container:
    return Container(
        payslips_repo=payslips_repo,
        employees_repo=employees_repo,
        slip_storage=slip_storage,
        payroll_service=PayrollService(payslips_repo, employees_repo, slip_storage, company_name=company_name),
        ledger_service=LedgerReportService(payslips_repo, window_months=window_months),
    )


def build_container(*, db_config: dict, settings=None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    storage = LocalSlipStorage(
        getattr(settings, "SLIP_STORAGE_DIR", "var/slips"),
        base_url=getattr(settings, "SLIP_BASE_URL", "/slips"),
    )
    return build_services(
        payslips_repo=MySQLPayslipRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        slip_storage=storage,
        company_name=getattr(settings, "COMPANY_NAME", DEFAULT_COMPANY_NAME),
        window_months=int(getattr(settings, "TREND_WINDOW_MONTHS", DEFAULT_TREND_WINDOW_MONTHS)),
    )
