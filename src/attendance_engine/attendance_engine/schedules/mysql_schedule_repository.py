from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import FixedHours, FlexibleHours, WorkingDays, WorkSchedule
from .repository import ScheduleRepository

_COLUMNS = """
    schedule_id, name, is_flexible, start_time, end_time, total_work_hours,
    working_days, flex_allowance_minutes, department_id, description
"""


def _to_schedule(r: Dict[str, Any]) -> WorkSchedule:
    if r.get("is_flexible"):
        mode = FlexibleHours(total_work_hours=float(r["total_work_hours"]))
    else:
        mode = FixedHours(
            start_time=normalize_mysql_time(r["start_time"]),
            end_time=normalize_mysql_time(r["end_time"]),
        )
    return WorkSchedule(
        schedule_id=int(r["schedule_id"]),
        name=r["name"],
        mode=mode,
        working_days=WorkingDays.from_mask(r["working_days"]),
        flex_allowance_minutes=int(r.get("flex_allowance_minutes") or 0),
        department_id=int(r["department_id"]) if r.get("department_id") is not None else None,
        description=r.get("description") or "",
    )


def _to_params(schedule: WorkSchedule) -> tuple:
    if isinstance(schedule.mode, FixedHours):
        is_flexible, start, end, total = 0, schedule.mode.start_time, schedule.mode.end_time, None
    else:
        is_flexible, start, end, total = 1, None, None, schedule.mode.total_work_hours
    return (
        schedule.name,
        is_flexible,
        start,
        end,
        total,
        schedule.working_days.to_mask(),
        int(schedule.flex_allowance_minutes),
        schedule.department_id,
        schedule.description,
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, schedule_id: int) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_schedules WHERE schedule_id=%s", (int(schedule_id),))
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def list_all(self) -> Sequence[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_schedules ORDER BY schedule_id")
            return [_to_schedule(r) for r in fetchall(cur)]

    def list_for_department(self, department_id: int) -> Sequence[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_schedules WHERE department_id=%s ORDER BY schedule_id",
                (int(department_id),),
            )
            return [_to_schedule(r) for r in fetchall(cur)]

    def create(self, schedule: WorkSchedule) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_schedules(
                    name, is_flexible, start_time, end_time, total_work_hours,
                    working_days, flex_allowance_minutes, department_id, description
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _to_params(schedule),
            )
            return int(cur.lastrowid)

    def update(self, schedule: WorkSchedule) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_schedules
                SET name=%s, is_flexible=%s, start_time=%s, end_time=%s, total_work_hours=%s,
                    working_days=%s, flex_allowance_minutes=%s, department_id=%s, description=%s
                WHERE schedule_id=%s
                """,
                _to_params(schedule) + (int(schedule.schedule_id),),
            )
            return cur.rowcount > 0

    def delete(self, *, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_schedules WHERE schedule_id=%s", (int(schedule_id),))
            return cur.rowcount > 0

    def set_department(self, *, schedule_id: int, department_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE work_schedules SET department_id=%s WHERE schedule_id=%s",
                (department_id, int(schedule_id)),
            )
            return cur.rowcount > 0
