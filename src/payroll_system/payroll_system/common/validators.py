from __future__ import annotations

import math
import re
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} required")
    return str(value).strip()


def to_number(value: Any, field_name: str, *, default: Optional[float] = None) -> float:
    """Coerce a form value (str/int/float) into a finite float.

    Blank values fall back to ``default``; without a default they are an error.
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ValidationError(f"{field_name} required")
        return float(default)

    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")

    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None

    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a number")
    return number


def require_non_negative(value: Any, field_name: str, *, default: Optional[float] = None) -> float:
    number = to_number(value, field_name, default=default)
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def require_percentage(value: Any, field_name: str, *, default: Optional[float] = None) -> float:
    number = to_number(value, field_name, default=default)
    if number < 0 or number > 100:
        raise ValidationError(f"{field_name} must be between 0 and 100")
    return number


_IDENTIFIER_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def require_identifier(value: Optional[str], field_name: str) -> str:
    """Non-empty id made of letters, digits, ``-``, ``_`` and ``.``; it ends up in file keys."""
    text = require_non_empty(value, field_name)
    if not _IDENTIFIER_RE.match(text):
        raise ValidationError(f"{field_name} may only contain letters, digits, '-', '_' or '.'")
    return text
