from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.formatting import format_currency, round_money
from ..core.constants import DEFAULT_TREND_WINDOW_MONTHS
from ..payroll.repository import PayslipRepository
from ..payroll.service import payslip_to_ui
from .aggregator import apply_filter, summarize, summarize_history
from .model import LedgerFilter, LedgerSummary, SalaryHistory, TrendPoint

EXPORT_FIELDS = [
    "month",
    "employee_id",
    "employee_name",
    "department",
    "base_salary",
    "allowances",
    "total_bonus",
    "gross_salary",
    "tax",
    "total_deductions",
    "net_salary",
    "status",
]


def _trend_to_ui(points: list[TrendPoint]) -> list[dict]:
    return [{"month": p.label, "total": round_money(p.total)} for p in points]


def summary_to_ui(summary: LedgerSummary) -> dict:
    return {
        "total_paid": round_money(summary.total_paid),
        "total_paid_display": format_currency(summary.total_paid),
        "average_salary": round_money(summary.average_salary),
        "average_salary_display": format_currency(summary.average_salary),
        "total_employees": summary.total_employees,
        "processed_slips": summary.processed_slips,
        "department_totals": {k: round_money(v) for k, v in summary.per_department_total.items()},
        "monthly_trend": _trend_to_ui(summary.monthly_trend),
        "salary_ranges": dict(summary.salary_histogram),
    }


def history_to_ui(history: SalaryHistory) -> dict:
    return {
        "year": history.year,
        "total_earned": round_money(history.total_earned),
        "average_salary": round_money(history.average_salary),
        "highest_salary": round_money(history.highest_salary),
        "lowest_salary": round_money(history.lowest_salary),
        "bonus_total": round_money(history.bonus_total),
        "deductions_total": round_money(history.deductions_total),
        "monthly": _trend_to_ui(history.monthly),
    }


class LedgerReportService:
    """Read side of payroll: dashboard cards, charts, history and exports.

    Every call re-reads the store and recomputes; nothing is cached.
    """

    def __init__(self, payslips: PayslipRepository, *, window_months: int = DEFAULT_TREND_WINDOW_MONTHS):
        self._payslips = payslips
        self._window_months = int(window_months)

    def _load(self, ledger_filter: LedgerFilter):
        return self._payslips.list(department=ledger_filter.department_or_none, year=ledger_filter.year_or_none)

    def dashboard(
        self,
        ledger_filter: LedgerFilter,
        *,
        window_months: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> LedgerSummary:
        records = self._load(ledger_filter)
        return summarize(
            records,
            ledger_filter,
            window_months=window_months or self._window_months,
            now=now or now_local(),
        )

    def history(self, *, employee_id: str, year: int) -> SalaryHistory:
        return summarize_history(self._payslips.list_for_employee(employee_id), year)

    def export_rows(self, ledger_filter: LedgerFilter) -> list[dict]:
        rows = apply_filter(self._load(ledger_filter), ledger_filter)
        rows.sort(key=lambda r: (r.period, r.department or "", r.employee_id))
        return [{k: payslip_to_ui(r)[k] for k in EXPORT_FIELDS} for r in rows]
