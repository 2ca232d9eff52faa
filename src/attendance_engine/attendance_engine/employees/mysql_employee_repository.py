from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, full_name, employee_code, department_id, work_schedule_id,
    is_flexible_hours, required_work_hours_per_day, hire_date, is_active
"""


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        full_name=row["full_name"],
        employee_code=row["employee_code"],
        department_id=int(row["department_id"]),
        work_schedule_id=int(row["work_schedule_id"]) if row.get("work_schedule_id") is not None else None,
        is_flexible_hours=bool(row.get("is_flexible_hours")),
        required_work_hours_per_day=float(row.get("required_work_hours_per_day") or 0),
        hire_date=row.get("hire_date"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE is_active=1 ORDER BY employee_id")
            return [_to_employee(r) for r in fetchall(cur)]

    def set_work_schedule(self, employee_id: int, *, work_schedule_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET work_schedule_id=%s WHERE employee_id=%s",
                (work_schedule_id, int(employee_id)),
            )
            return cur.rowcount > 0
