from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..core.constants import ALL

YearFilter = Union[int, str]


@dataclass(frozen=True)
class LedgerFilter:
    """Dashboard filter. Malformed values fall back to "all"."""

    department: str = ALL
    year: YearFilter = ALL

    @classmethod
    def parse(cls, department: Any = None, year: Any = None) -> "LedgerFilter":
        dept = str(department).strip() if department is not None else ""
        if not dept or dept.lower() == ALL:
            dept = ALL

        parsed_year: YearFilter = ALL
        if isinstance(year, int) and not isinstance(year, bool):
            parsed_year = year
        elif isinstance(year, str) and year.strip().isdigit():
            parsed_year = int(year.strip())
        return cls(department=dept, year=parsed_year)

    @property
    def department_or_none(self) -> Optional[str]:
        return None if self.department == ALL else self.department

    @property
    def year_or_none(self) -> Optional[int]:
        return None if self.year == ALL else int(self.year)


@dataclass(frozen=True)
class TrendPoint:
    year: int
    month: int
    label: str
    total: float


@dataclass(frozen=True)
class LedgerSummary:
    total_paid: float
    average_salary: float
    total_employees: int
    processed_slips: int
    per_department_total: dict[str, float]
    monthly_trend: list[TrendPoint]
    salary_histogram: dict[str, int]


@dataclass(frozen=True)
class SalaryHistory:
    """Per-employee yearly view (salary history page)."""

    year: int
    total_earned: float
    average_salary: float
    highest_salary: float
    lowest_salary: float
    bonus_total: float
    deductions_total: float
    monthly: list[TrendPoint]
