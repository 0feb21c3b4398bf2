"""Presentation helpers. Rounding to cents happens only here."""

from __future__ import annotations

from datetime import date


def round_money(amount: float) -> float:
    return round(float(amount), 2)


def format_currency(amount: float) -> str:
    """USD formatting, e.g. ``-$1,234.56``."""
    value = round_money(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_month(year: int, month: int) -> str:
    """``2026-01`` -> ``January 2026``."""
    return date(int(year), int(month), 1).strftime("%B %Y")


def short_month(year: int, month: int) -> str:
    return date(int(year), int(month), 1).strftime("%b")
