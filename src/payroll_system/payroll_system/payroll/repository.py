from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeProfile, PayPeriod, PayslipRecord


class PayslipRepository(Protocol):
    """Persistent payslip store.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def save(self, record: PayslipRecord) -> int:
        """Create or overwrite the payslip keyed by (employee_id, period).

        Returns payslip_id.
        """

        raise NotImplementedError

    def get(self, *, employee_id: str, period: PayPeriod) -> Optional[PayslipRecord]:
        raise NotImplementedError

    def list(
        self,
        *,
        department: Optional[str] = None,
        period: Optional[PayPeriod] = None,
        year: Optional[int] = None,
    ) -> Sequence[PayslipRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[PayslipRecord]:
        raise NotImplementedError


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: str) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def list_by_department(self, department: str) -> Sequence[EmployeeProfile]:
        raise NotImplementedError
