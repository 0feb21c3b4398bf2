from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from src.payroll_system.payroll_system.core.constants import UNASSIGNED_DEPARTMENT
from src.payroll_system.payroll_system.core.enums import AdjustmentMode
from src.payroll_system.payroll_system.payroll.model import (
    EmployeeProfile,
    PayPeriod,
    PayrollRules,
    PayslipInput,
    PayslipRecord,
)


class InMemoryPayslips:
    def __init__(self, records=None):
        self._by_key: dict[tuple[str, PayPeriod], PayslipRecord] = {}
        self._id = 0
        for r in records or []:
            self.save(r)

    def save(self, record: PayslipRecord) -> int:
        key = (record.employee_id, record.period)
        existing = self._by_key.get(key)
        if existing:
            payslip_id = existing.payslip_id
        else:
            self._id += 1
            payslip_id = self._id
        self._by_key[key] = replace(record, payslip_id=payslip_id)
        return payslip_id

    def get(self, *, employee_id: str, period: PayPeriod) -> Optional[PayslipRecord]:
        return self._by_key.get((employee_id, period))

    def list(self, *, department=None, period=None, year=None):
        rows = list(self._by_key.values())
        if department is not None:
            rows = [r for r in rows if (r.department or UNASSIGNED_DEPARTMENT) == department]
        if period is not None:
            rows = [r for r in rows if r.period == period]
        elif year is not None:
            rows = [r for r in rows if r.period.year == year]
        return rows

    def list_for_employee(self, employee_id: str):
        return [r for r in self._by_key.values() if r.employee_id == employee_id]


class InMemoryEmployees:
    def __init__(self, employees):
        self._employees = list(employees)

    def get_by_id(self, employee_id: str) -> Optional[EmployeeProfile]:
        return next((e for e in self._employees if e.employee_id == employee_id), None)

    def list_by_department(self, department: str):
        return [e for e in self._employees if e.department == department]


class FakeSlipStorage:
    def __init__(self):
        self.uploads: dict[str, bytes] = {}

    def upload(self, key: str, content: bytes) -> str:
        self.uploads[key] = content
        return f"https://files.example/{key}"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 15, 9, 0, 0)


@pytest.fixture
def make_input():
    def _make(
        *,
        base=3000,
        employee_id="EMP-001",
        name="Alice",
        department="Engineering",
        month="2026-03",
        **rules,
    ) -> PayslipInput:
        return PayslipInput(
            employee_id=employee_id,
            employee_name=name,
            department=department,
            period=PayPeriod.parse(month),
            base_salary=base,
            rules=PayrollRules(**rules),
        )

    return _make


@pytest.fixture
def make_record(fixed_now):
    """A stored-looking payslip with only the fields the ledger reads set meaningfully."""

    def _make(
        net: float,
        *,
        employee_id="EMP-001",
        department: Optional[str] = "Engineering",
        month="2026-03",
        bonus: float = 0.0,
        deductions: float = 0.0,
    ) -> PayslipRecord:
        return PayslipRecord(
            employee_id=employee_id,
            employee_name=employee_id.lower(),
            department=department,
            period=PayPeriod.parse(month),
            base_salary=net,
            allowances=0.0,
            bonus=bonus,
            bonus_mode=AdjustmentMode.FIXED,
            deduction=deductions,
            deduction_mode=AdjustmentMode.FIXED,
            tax_rate=0.0,
            notes="",
            effective_bonus=bonus,
            effective_deduction=deductions,
            gross_salary=net + deductions,
            tax_amount=0.0,
            total_deductions=deductions,
            net_salary=net,
            created_at=fixed_now,
        )

    return _make


@pytest.fixture
def employees():
    return InMemoryEmployees(
        [
            EmployeeProfile("EMP-001", "Alice", "Engineering", 5000),
            EmployeeProfile("EMP-002", "Bob", "Engineering", 4000),
            EmployeeProfile("EMP-003", "Carla", "HR", 3000),
        ]
    )


@pytest.fixture
def payslips():
    return InMemoryPayslips()


@pytest.fixture
def storage():
    return FakeSlipStorage()


@pytest.fixture
def make_employees():
    return InMemoryEmployees
