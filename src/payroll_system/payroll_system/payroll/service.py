from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.formatting import format_currency, round_money
from ..common.validators import require_non_empty
from ..core.constants import ALL, DEFAULT_COMPANY_NAME
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .computation import compute_bulk_payslips, compute_payslip
from .model import BulkPayrollResult, PayPeriod, PayrollRules, PayslipInput, PayslipRecord
from .repository import EmployeeRepository, PayslipRepository
from .slip import render_text_slip
from .storage import SlipStorage, slip_key

_logger = logging.getLogger(__name__)


class PayrollService:
    """Use cases of the payroll screen: single payslip, bulk run, payslip table."""

    def __init__(
        self,
        payslips: PayslipRepository,
        employees: EmployeeRepository,
        storage: SlipStorage,
        *,
        calculator: Optional[PayrollCalculator] = None,
        company_name: str = DEFAULT_COMPANY_NAME,
    ):
        self._payslips = payslips
        self._employees = employees
        self._storage = storage
        self._calculator = calculator or StandardPayrollCalculator()
        self._company_name = company_name

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

    def preview(self, payslip: PayslipInput, *, now: Optional[datetime] = None) -> PayslipRecord:
        """Compute without storing anything (live breakdown on the form)."""
        return compute_payslip(payslip, created_at=now, calculator=self._calculator)

    def _publish(self, record: PayslipRecord) -> PayslipRecord:
        content = render_text_slip(record, company_name=self._company_name)
        url = self._storage.upload(slip_key(record.employee_id, record.period), content)
        record = replace(record, slip_url=url)
        payslip_id = self._payslips.save(record)
        return replace(record, payslip_id=payslip_id)

    def _with_profile(self, payslip: PayslipInput) -> PayslipInput:
        """Fill name and department from the employee directory when the form left them out."""
        if payslip.employee_name and payslip.department:
            return payslip
        profile = self._employees.get_by_id(payslip.employee_id)
        if profile is None:
            return payslip
        return replace(
            payslip,
            employee_name=payslip.employee_name or profile.name,
            department=payslip.department or profile.department,
        )

    def generate_payslip(
        self,
        *,
        current_role: Role,
        payslip: PayslipInput,
        now: Optional[datetime] = None,
    ) -> PayslipRecord:
        self._require_admin(current_role)
        payslip = self._with_profile(payslip)

        record = compute_payslip(payslip, created_at=now or now_local(), calculator=self._calculator)
        record = self._publish(record)
        _logger.info(
            "Payslip %s generated for employee %s (%s)", record.payslip_id, record.employee_id, record.period
        )
        return record

    def process_department(
        self,
        *,
        current_role: Role,
        department: str,
        period: PayPeriod,
        rules: Optional[PayrollRules] = None,
        now: Optional[datetime] = None,
    ) -> BulkPayrollResult:
        """Compute and publish a payslip for every active employee of a department.

        Rejected entries are reported in the result; the rest are still published.
        """

        self._require_admin(current_role)
        department = require_non_empty(department, "department")

        employees = list(self._employees.list_by_department(department))
        if not employees:
            raise NotFoundError(f"No employees in department {department}")

        result = compute_bulk_payslips(
            employees,
            period=period,
            rules=rules,
            department=department,
            created_at=now or now_local(),
            calculator=self._calculator,
        )
        published = [self._publish(r) for r in result.records]
        return BulkPayrollResult(records=published, errors=result.errors)

    def list_payslips(
        self,
        *,
        department: str = ALL,
        period: Optional[PayPeriod] = None,
        search: str = "",
    ) -> Sequence[PayslipRecord]:
        rows = self._payslips.list(department=None if department == ALL else department, period=period)
        needle = (search or "").strip().lower()
        if not needle:
            return list(rows)
        return [r for r in rows if needle in (r.employee_name or "").lower() or needle in r.employee_id.lower()]

    def get_payslip(self, *, current_role: Role, current_employee_id: str, employee_id: str, period: PayPeriod):
        if current_role != Role.ADMIN and current_employee_id != employee_id:
            raise AuthorizationError("Permission denied")

        record = self._payslips.get(employee_id=employee_id, period=period)
        if not record:
            raise NotFoundError("Payslip not found")
        return record


def payslip_to_ui(record: PayslipRecord) -> dict:
    """JSON/CSV friendly view; amounts rounded to cents here and nowhere earlier."""

    return {
        "payslip_id": record.payslip_id,
        "employee_id": record.employee_id,
        "employee_name": record.employee_name,
        "department": record.department or "",
        "month": record.period.label,
        "base_salary": round_money(record.base_salary),
        "allowances": round_money(record.allowances),
        "bonus": record.bonus,
        "bonus_type": record.bonus_mode.value,
        "deductions": record.deduction,
        "deduction_type": record.deduction_mode.value,
        "tax_rate": record.tax_rate,
        "total_bonus": round_money(record.effective_bonus),
        "gross_salary": round_money(record.gross_salary),
        "tax": round_money(record.tax_amount),
        "total_deductions": round_money(record.total_deductions),
        "net_salary": round_money(record.net_salary),
        "net_salary_display": format_currency(record.net_salary),
        "status": record.status.value,
        "flags": [f.value for f in record.flags],
        "slip_url": record.slip_url,
        "notes": record.notes,
        "created_at": record.created_at.isoformat(timespec="seconds") if record.created_at else None,
    }
