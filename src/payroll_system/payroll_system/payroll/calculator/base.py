from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ..model import PayslipInput, PayslipRecord


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, payslip: PayslipInput, *, created_at: datetime) -> PayslipRecord:
        raise NotImplementedError
