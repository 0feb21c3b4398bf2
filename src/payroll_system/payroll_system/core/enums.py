from __future__ import annotations

from enum import Enum

from .exceptions import ValidationError


class Role(str, Enum):
    """User role used for role-gated views."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AdjustmentMode(str, Enum):
    """How a bonus or deduction amount is interpreted."""

    FIXED = "fixed"
    PERCENTAGE = "percentage"

    @classmethod
    def parse(cls, value, field_name: str = "mode") -> "AdjustmentMode":
        if isinstance(value, cls):
            return value
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.FIXED
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"{field_name} must be 'fixed' or 'percentage'") from None


class PayslipStatus(str, Enum):
    PROCESSED = "processed"


class PayslipFlag(str, Enum):
    """Warnings attached to a computed payslip. They never block it."""

    NEGATIVE_NET_SALARY = "NEGATIVE_NET_SALARY"
