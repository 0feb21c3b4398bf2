"""Fold payslip records into dashboard statistics.

Everything here is a pure function of its arguments: the caller owns the
record snapshot and the clock.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import now_local, trailing_months
from ..common.formatting import short_month
from ..core.constants import (
    ALLOWED_TREND_WINDOWS,
    DEFAULT_TREND_WINDOW_MONTHS,
    SALARY_BUCKETS,
    UNASSIGNED_DEPARTMENT,
)
from ..payroll.model import PayslipRecord
from .model import LedgerFilter, LedgerSummary, SalaryHistory, TrendPoint


def apply_filter(records: Iterable[PayslipRecord], ledger_filter: LedgerFilter) -> list[PayslipRecord]:
    department = ledger_filter.department_or_none
    year = ledger_filter.year_or_none
    return [
        r
        for r in records
        if (department is None or (r.department or UNASSIGNED_DEPARTMENT) == department)
        and (year is None or r.period.year == year)
    ]


def bucket_label(net_salary: float) -> str:
    """Histogram bucket; a value on a boundary belongs to the lower bucket."""

    for label, upper in SALARY_BUCKETS:
        if upper is None or net_salary <= upper:
            return label
    raise AssertionError("unreachable")


def salary_histogram(records: Iterable[PayslipRecord]) -> dict[str, int]:
    counts = {label: 0 for label, _ in SALARY_BUCKETS}
    for r in records:
        counts[bucket_label(r.net_salary)] += 1
    return counts


def department_totals(records: Iterable[PayslipRecord]) -> dict[str, float]:
    totals: dict[str, float] = defaultdict(float)
    for r in records:
        totals[r.department or UNASSIGNED_DEPARTMENT] += r.net_salary
    return {name: totals[name] for name in sorted(totals)}


def monthly_trend(records: Iterable[PayslipRecord], *, window_months: int, now: datetime) -> list[TrendPoint]:
    by_month: dict[tuple[int, int], float] = defaultdict(float)
    for r in records:
        by_month[(r.period.year, r.period.month)] += r.net_salary

    return [
        TrendPoint(year=y, month=m, label=f"{short_month(y, m)} {y}", total=by_month.get((y, m), 0.0))
        for y, m in trailing_months(now, window_months)
    ]


def _window(window_months) -> int:
    try:
        value = int(window_months)
    except (TypeError, ValueError):
        return DEFAULT_TREND_WINDOW_MONTHS
    return value if value in ALLOWED_TREND_WINDOWS else DEFAULT_TREND_WINDOW_MONTHS


def summarize(
    records: Sequence[PayslipRecord],
    ledger_filter: Optional[LedgerFilter] = None,
    *,
    window_months: int = DEFAULT_TREND_WINDOW_MONTHS,
    now: Optional[datetime] = None,
) -> LedgerSummary:
    """Summary cards and chart series for the payroll dashboard.

    Never raises on empty input; every figure degrades to zero and the trend
    always has exactly ``window_months`` points (6 or 12, anything else means 12).
    """

    filtered = apply_filter(records, ledger_filter or LedgerFilter())
    total = sum(r.net_salary for r in filtered)
    count = len(filtered)

    return LedgerSummary(
        total_paid=total,
        average_salary=total / count if count else 0.0,
        total_employees=len({r.employee_id for r in filtered}),
        processed_slips=count,
        per_department_total=department_totals(filtered),
        monthly_trend=monthly_trend(filtered, window_months=_window(window_months), now=now or now_local()),
        salary_histogram=salary_histogram(filtered),
    )


def summarize_history(records: Sequence[PayslipRecord], year: int) -> SalaryHistory:
    """One employee's year: totals, extremes and a January to December series."""

    yearly = [r for r in records if r.period.year == int(year)]
    salaries = [r.net_salary for r in yearly]
    total = sum(salaries)

    by_month: dict[int, float] = defaultdict(float)
    for r in yearly:
        by_month[r.period.month] += r.net_salary

    return SalaryHistory(
        year=int(year),
        total_earned=total,
        average_salary=total / len(salaries) if salaries else 0.0,
        highest_salary=max(salaries, default=0.0),
        lowest_salary=min(salaries, default=0.0),
        bonus_total=sum(r.effective_bonus for r in yearly),
        deductions_total=sum(r.total_deductions for r in yearly),
        monthly=[
            TrendPoint(year=int(year), month=m, label=short_month(int(year), m), total=by_month.get(m, 0.0))
            for m in range(1, 13)
        ],
    )
