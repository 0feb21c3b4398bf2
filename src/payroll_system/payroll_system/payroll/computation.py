"""Entry points used by the payroll form (single payslip) and bulk runs."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional, Union

from ..common.datetime_utils import now_local
from ..core.exceptions import ValidationError
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import (
    BulkEntryError,
    BulkPayrollResult,
    EmployeeProfile,
    PayPeriod,
    PayrollRules,
    PayslipInput,
    PayslipRecord,
)

_logger = logging.getLogger(__name__)

BulkEntry = Union[EmployeeProfile, tuple]


def compute_payslip(
    payslip: PayslipInput,
    *,
    created_at: Optional[datetime] = None,
    calculator: Optional[PayrollCalculator] = None,
) -> PayslipRecord:
    """Compute one payslip. Raises ValidationError before any arithmetic."""

    calc = calculator or StandardPayrollCalculator()
    return calc.compute(payslip, created_at=created_at or now_local())


def _as_profile(entry: BulkEntry, department: Optional[str]) -> EmployeeProfile:
    if isinstance(entry, EmployeeProfile):
        return entry
    employee_id, base = entry[0], entry[1]
    return EmployeeProfile(employee_id=str(employee_id), name="", department=department, base_salary=base)


def compute_bulk_payslips(
    entries: Iterable[BulkEntry],
    *,
    period: PayPeriod,
    rules: Optional[PayrollRules] = None,
    department: Optional[str] = None,
    created_at: Optional[datetime] = None,
    calculator: Optional[PayrollCalculator] = None,
) -> BulkPayrollResult:
    """Apply the same rules to every entry.

    Entries are ``EmployeeProfile`` objects or ``(employee_id, base_salary)``
    pairs. Invalid entries never abort the batch: valid records come back in
    input order and each rejected entry is reported as (index, employee_id, message).
    """

    calc = calculator or StandardPayrollCalculator()
    rules = rules or PayrollRules()
    stamp = created_at or now_local()

    records: list[PayslipRecord] = []
    errors: list[BulkEntryError] = []

    for index, entry in enumerate(entries):
        profile = _as_profile(entry, department)
        payslip = PayslipInput(
            employee_id=profile.employee_id,
            employee_name=profile.name,
            department=profile.department if profile.department is not None else department,
            period=period,
            base_salary=profile.base_salary,
            rules=rules,
        )
        try:
            records.append(calc.compute(payslip, created_at=stamp))
        except ValidationError as e:
            _logger.warning("Skipping payslip for employee %s at index %d: %s", profile.employee_id, index, e)
            errors.append(BulkEntryError(index=index, employee_id=profile.employee_id, message=str(e)))

    _logger.info("Bulk payroll %s: %d computed, %d rejected", period, len(records), len(errors))
    return BulkPayrollResult(records=records, errors=errors)
