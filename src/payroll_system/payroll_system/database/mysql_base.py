from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """Normalize MySQL DECIMAL/DOUBLE values (Decimal, float, str) into float."""

    if value is None:
        return default
    if isinstance(value, (Decimal, int, float)):
        return float(value)
    if isinstance(value, str):
        return float(value.strip()) if value.strip() else default
    raise TypeError(f"Unsupported MySQL numeric value type: {type(value)!r}")
