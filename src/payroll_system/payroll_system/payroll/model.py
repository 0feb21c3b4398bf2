from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.validators import require_identifier, require_non_empty, require_non_negative, require_percentage
from ..core.enums import AdjustmentMode, PayslipFlag, PayslipStatus
from ..core.exceptions import ValidationError

_PERIOD_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")


@dataclass(frozen=True, order=True)
class PayPeriod:
    """Calendar month a payslip is issued for."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= int(self.month) <= 12:
            raise ValidationError("month must be between 1 and 12")

    @classmethod
    def parse(cls, value: Any) -> "PayPeriod":
        if isinstance(value, cls):
            return value
        if isinstance(value, date):
            return cls(value.year, value.month)
        m = _PERIOD_RE.match(str(value or ""))
        if not m:
            raise ValidationError("month required (YYYY-MM)")
        return cls(int(m.group(1)), int(m.group(2)))

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class PayrollRules:
    """Adjustment rules shared by a single payslip or a whole bulk run.

    Every recognized form field is listed here with its default.
    """

    allowances: float = 0.0
    bonus: float = 0.0
    bonus_mode: AdjustmentMode = AdjustmentMode.FIXED
    deduction: float = 0.0
    deduction_mode: AdjustmentMode = AdjustmentMode.FIXED
    tax_rate: float = 0.0
    notes: str = ""

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "PayrollRules":
        return cls(
            allowances=require_non_negative(data.get("allowances"), "allowances", default=0),
            bonus=require_non_negative(data.get("bonus"), "bonus", default=0),
            bonus_mode=AdjustmentMode.parse(data.get("bonusType") or data.get("bonus_mode"), "bonus type"),
            deduction=require_non_negative(data.get("deductions") or data.get("deduction"), "deduction", default=0),
            deduction_mode=AdjustmentMode.parse(
                data.get("deductionType") or data.get("deduction_mode"), "deduction type"
            ),
            tax_rate=require_percentage(data.get("taxRate") or data.get("tax_rate"), "tax rate", default=0),
            notes=str(data.get("notes") or "").strip(),
        )


@dataclass(frozen=True)
class PayslipInput:
    employee_id: str
    employee_name: str
    department: Optional[str]
    period: PayPeriod
    base_salary: Any
    rules: PayrollRules = field(default_factory=PayrollRules)

    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> "PayslipInput":
        """Build from a raw payroll form payload (camelCase keys, string numbers)."""

        # base salary is left raw; the calculator owns its validation
        return cls(
            employee_id=require_identifier(data.get("employeeId") or data.get("employee_id"), "employee"),
            employee_name=str(data.get("employeeName") or data.get("employee_name") or "").strip(),
            department=require_non_empty(data.get("department"), "department"),
            period=PayPeriod.parse(data.get("month") or data.get("period")),
            base_salary=data.get("baseSalary", data.get("base_salary")),
            rules=PayrollRules.from_form(data),
        )


@dataclass(frozen=True)
class PayslipRecord:
    """A computed payslip. Amounts are unrounded floats."""

    employee_id: str
    employee_name: str
    department: Optional[str]
    period: PayPeriod
    base_salary: float
    allowances: float
    bonus: float
    bonus_mode: AdjustmentMode
    deduction: float
    deduction_mode: AdjustmentMode
    tax_rate: float
    notes: str

    effective_bonus: float
    effective_deduction: float
    gross_salary: float
    tax_amount: float
    total_deductions: float
    net_salary: float

    created_at: datetime = field(compare=False)
    status: PayslipStatus = PayslipStatus.PROCESSED
    slip_url: Optional[str] = None
    flags: tuple[PayslipFlag, ...] = ()
    payslip_id: Optional[int] = None


@dataclass(frozen=True)
class EmployeeProfile:
    employee_id: str
    name: str
    department: Optional[str]
    base_salary: Optional[float]


@dataclass(frozen=True)
class BulkEntryError:
    index: int
    employee_id: str
    message: str


@dataclass(frozen=True)
class BulkPayrollResult:
    records: list[PayslipRecord]
    errors: list[BulkEntryError]

    @property
    def ok(self) -> bool:
        return not self.errors
