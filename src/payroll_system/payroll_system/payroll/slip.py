"""Salary slip content.

Only the text lines are built here; binary rendering (PDF) belongs to an
external renderer that consumes the same lines.
"""

from __future__ import annotations

from ..common.formatting import format_currency, format_month
from ..core.constants import DEFAULT_COMPANY_NAME
from ..core.enums import AdjustmentMode
from .model import PayslipRecord


def _mode_suffix(amount: float, mode: AdjustmentMode) -> str:
    if mode == AdjustmentMode.PERCENTAGE:
        return f" ({amount:g}% of base)"
    return ""


def build_slip_lines(record: PayslipRecord, *, company_name: str = DEFAULT_COMPANY_NAME) -> list[str]:
    return [
        company_name,
        "SALARY SLIP",
        "",
        f"Employee: {record.employee_name or record.employee_id}",
        f"Department: {record.department or '-'}",
        f"Month: {format_month(record.period.year, record.period.month)}",
        f"Employee ID: {record.employee_id}",
        "",
        "Earnings:",
        f"Base Salary: {format_currency(record.base_salary)}",
        f"Bonus: {format_currency(record.effective_bonus)}{_mode_suffix(record.bonus, record.bonus_mode)}",
        f"Allowances: {format_currency(record.allowances)}",
        f"Gross Salary: {format_currency(record.gross_salary)}",
        "",
        "Deductions:",
        f"Tax ({record.tax_rate:g}%): {format_currency(record.tax_amount)}",
        "Other Deductions: "
        f"{format_currency(record.effective_deduction)}{_mode_suffix(record.deduction, record.deduction_mode)}",
        f"Total Deductions: {format_currency(record.total_deductions)}",
        "",
        f"Net Salary: {format_currency(record.net_salary)}",
    ]


def render_text_slip(record: PayslipRecord, *, company_name: str = DEFAULT_COMPANY_NAME) -> bytes:
    lines = build_slip_lines(record, company_name=company_name)
    if record.notes:
        lines += ["", f"Notes: {record.notes}"]
    return ("\n".join(lines) + "\n").encode("utf-8")
