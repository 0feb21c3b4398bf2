from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import EmployeeProfile
from .repository import EmployeeRepository


def _row_to_profile(r: dict) -> EmployeeProfile:
    return EmployeeProfile(
        employee_id=str(r["employee_id"]),
        name=r["name"],
        department=r.get("department"),
        base_salary=to_float(r.get("base_salary"), default=None),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id, name, department, base_salary FROM employees WHERE employee_id=%s",
                (employee_id,),
            )
            r = fetchone(cur)
            return _row_to_profile(r) if r else None

    def list_by_department(self, department: str) -> Sequence[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, name, department, base_salary
                FROM employees
                WHERE department=%s AND is_active=1
                ORDER BY employee_id ASC
                """,
                (department,),
            )
            return [_row_to_profile(r) for r in fetchall(cur)]
