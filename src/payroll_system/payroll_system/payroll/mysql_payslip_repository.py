from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import UNASSIGNED_DEPARTMENT
from ..core.enums import AdjustmentMode, PayslipFlag, PayslipStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import PayPeriod, PayslipRecord
from .repository import PayslipRepository

_COLUMNS = """
    payslip_id, employee_id, employee_name, department, period_year, period_month,
    base_salary, allowances, bonus, bonus_mode, deduction, deduction_mode, tax_rate, notes,
    effective_bonus, effective_deduction, gross_salary, tax_amount, total_deductions, net_salary,
    status, flags, slip_url, created_at
"""


def _row_to_record(r: dict) -> PayslipRecord:
    flags = tuple(PayslipFlag(f) for f in (r.get("flags") or "").split(",") if f)
    return PayslipRecord(
        payslip_id=int(r["payslip_id"]),
        employee_id=str(r["employee_id"]),
        employee_name=r.get("employee_name") or "",
        department=r.get("department"),
        period=PayPeriod(int(r["period_year"]), int(r["period_month"])),
        base_salary=to_float(r["base_salary"]),
        allowances=to_float(r.get("allowances")),
        bonus=to_float(r.get("bonus")),
        bonus_mode=AdjustmentMode(r.get("bonus_mode") or "fixed"),
        deduction=to_float(r.get("deduction")),
        deduction_mode=AdjustmentMode(r.get("deduction_mode") or "fixed"),
        tax_rate=to_float(r.get("tax_rate")),
        notes=r.get("notes") or "",
        effective_bonus=to_float(r["effective_bonus"]),
        effective_deduction=to_float(r["effective_deduction"]),
        gross_salary=to_float(r["gross_salary"]),
        tax_amount=to_float(r["tax_amount"]),
        total_deductions=to_float(r["total_deductions"]),
        net_salary=to_float(r["net_salary"]),
        status=PayslipStatus(r.get("status") or "processed"),
        flags=flags,
        slip_url=r.get("slip_url"),
        created_at=r["created_at"],
    )


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, record: PayslipRecord) -> int:
        params = (
            record.employee_id,
            record.employee_name,
            record.department,
            record.period.year,
            record.period.month,
            record.base_salary,
            record.allowances,
            record.bonus,
            record.bonus_mode.value,
            record.deduction,
            record.deduction_mode.value,
            record.tax_rate,
            record.notes or None,
            record.effective_bonus,
            record.effective_deduction,
            record.gross_salary,
            record.tax_amount,
            record.total_deductions,
            record.net_salary,
            record.status.value,
            ",".join(f.value for f in record.flags),
            record.slip_url,
            record.created_at,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payslips(
                    employee_id, employee_name, department, period_year, period_month,
                    base_salary, allowances, bonus, bonus_mode, deduction, deduction_mode, tax_rate, notes,
                    effective_bonus, effective_deduction, gross_salary, tax_amount, total_deductions, net_salary,
                    status, flags, slip_url, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    employee_name=VALUES(employee_name), department=VALUES(department),
                    base_salary=VALUES(base_salary), allowances=VALUES(allowances),
                    bonus=VALUES(bonus), bonus_mode=VALUES(bonus_mode),
                    deduction=VALUES(deduction), deduction_mode=VALUES(deduction_mode),
                    tax_rate=VALUES(tax_rate), notes=VALUES(notes),
                    effective_bonus=VALUES(effective_bonus), effective_deduction=VALUES(effective_deduction),
                    gross_salary=VALUES(gross_salary), tax_amount=VALUES(tax_amount),
                    total_deductions=VALUES(total_deductions), net_salary=VALUES(net_salary),
                    status=VALUES(status), flags=VALUES(flags), slip_url=VALUES(slip_url),
                    created_at=VALUES(created_at)
                """,
                params,
            )

            # If it was an update, lastrowid can be 0; fetch payslip_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT payslip_id FROM payslips WHERE employee_id=%s AND period_year=%s AND period_month=%s",
                (record.employee_id, record.period.year, record.period.month),
            )
            r = fetchone(cur)
            return int(r["payslip_id"]) if r else 0

    def get(self, *, employee_id: str, period: PayPeriod) -> Optional[PayslipRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payslips
                WHERE employee_id=%s AND period_year=%s AND period_month=%s
                """,
                (employee_id, period.year, period.month),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list(
        self,
        *,
        department: Optional[str] = None,
        period: Optional[PayPeriod] = None,
        year: Optional[int] = None,
    ) -> Sequence[PayslipRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if department == UNASSIGNED_DEPARTMENT:
            clauses.append("(department IS NULL OR department='' OR department=%s)")
            params.append(department)
        elif department is not None:
            clauses.append("department=%s")
            params.append(department)
        if period is not None:
            clauses.append("period_year=%s AND period_month=%s")
            params.extend([period.year, period.month])
        elif year is not None:
            clauses.append("period_year=%s")
            params.append(int(year))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payslips
                {where}
                ORDER BY period_year DESC, period_month DESC, employee_id ASC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: str) -> Sequence[PayslipRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payslips
                WHERE employee_id=%s
                ORDER BY period_year DESC, period_month DESC
                """,
                (employee_id,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
