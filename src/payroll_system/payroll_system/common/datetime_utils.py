from __future__ import annotations

from datetime import datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by ``delta`` months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def trailing_months(now: datetime, count: int) -> list[tuple[int, int]]:
    """The ``count`` calendar months ending with the month of ``now``, oldest first."""
    return [shift_month(now.year, now.month, -offset) for offset in range(count - 1, -1, -1)]
