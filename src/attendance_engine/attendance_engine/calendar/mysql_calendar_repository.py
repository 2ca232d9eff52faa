from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import CalendarEntryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WorkCalendarEntry
from .repository import WorkCalendarRepository

_COLUMNS = "entry_id, entry_date, name, entry_type, is_recurring_annually, description"


def _to_entry(r: Dict[str, Any]) -> WorkCalendarEntry:
    return WorkCalendarEntry(
        entry_id=int(r["entry_id"]),
        entry_date=r["entry_date"],
        name=r["name"],
        entry_type=CalendarEntryType(r["entry_type"]),
        is_recurring_annually=bool(r.get("is_recurring_annually")),
        description=r.get("description") or "",
    )


class MySQLWorkCalendarRepository(WorkCalendarRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_candidates(self, day: date) -> Sequence[WorkCalendarEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_calendar
                WHERE entry_date=%s
                   OR (is_recurring_annually=1 AND MONTH(entry_date)=%s AND DAY(entry_date)=%s)
                ORDER BY entry_id
                """,
                (day, day.month, day.day),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_range(self, *, start: date, end: date) -> Sequence[WorkCalendarEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_calendar WHERE entry_date BETWEEN %s AND %s ORDER BY entry_date",
                (start, end),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        entry_date: date,
        name: str,
        entry_type: CalendarEntryType,
        is_recurring_annually: bool = False,
        description: str = "",
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_calendar(entry_date, name, entry_type, is_recurring_annually, description)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (entry_date, name, entry_type.value, int(bool(is_recurring_annually)), description),
            )
            return int(cur.lastrowid)

    def delete(self, *, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_calendar WHERE entry_id=%s", (int(entry_id),))
            return cur.rowcount > 0

    def get_by_id(self, entry_id: int) -> Optional[WorkCalendarEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_calendar WHERE entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _to_entry(r) if r else None
