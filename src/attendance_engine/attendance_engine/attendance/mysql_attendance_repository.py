from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceCode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, AttendanceVerdict
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, check_in_time, check_out_time, work_duration_seconds,
    is_complete, is_late_arrival, is_early_departure, is_overtime, is_early_arrival,
    late_minutes, early_departure_minutes, overtime_minutes, early_arrival_minutes,
    is_flexible_schedule, expected_work_hours, attendance_code, notes
"""


def _opt_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    seconds = r.get("work_duration_seconds")
    verdict = AttendanceVerdict(
        attendance_code=AttendanceCode(r["attendance_code"]),
        is_complete=bool(r["is_complete"]),
        is_late_arrival=bool(r["is_late_arrival"]),
        is_early_departure=bool(r["is_early_departure"]),
        is_overtime=bool(r["is_overtime"]),
        is_early_arrival=bool(r["is_early_arrival"]),
        late_minutes=_opt_float(r.get("late_minutes")),
        early_departure_minutes=_opt_float(r.get("early_departure_minutes")),
        overtime_minutes=_opt_float(r.get("overtime_minutes")),
        early_arrival_minutes=_opt_float(r.get("early_arrival_minutes")),
        work_duration=timedelta(seconds=int(seconds)) if seconds is not None else None,
        has_check_in=r.get("check_in_time") is not None,
        is_flexible_schedule=bool(r["is_flexible_schedule"]),
        expected_work_hours=float(r.get("expected_work_hours") or 0),
    )
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        verdict=verdict,
        notes=r.get("notes") or "",
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_range(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date
                """,
                (int(employee_id), start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def save(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
        verdict: AttendanceVerdict,
        notes: str = "",
    ) -> int:
        duration = verdict.work_duration
        params = (
            int(employee_id),
            work_date,
            check_in_time,
            check_out_time,
            int(duration.total_seconds()) if duration is not None else None,
            int(verdict.is_complete),
            int(verdict.is_late_arrival),
            int(verdict.is_early_departure),
            int(verdict.is_overtime),
            int(verdict.is_early_arrival),
            verdict.late_minutes,
            verdict.early_departure_minutes,
            verdict.overtime_minutes,
            verdict.early_arrival_minutes,
            int(verdict.is_flexible_schedule),
            verdict.expected_work_hours,
            verdict.attendance_code.value,
            notes,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            # The unique (employee_id, work_date) key serializes concurrent writers.
            cur.execute(
                """
                INSERT INTO attendance(
                    employee_id, work_date, check_in_time, check_out_time, work_duration_seconds,
                    is_complete, is_late_arrival, is_early_departure, is_overtime, is_early_arrival,
                    late_minutes, early_departure_minutes, overtime_minutes, early_arrival_minutes,
                    is_flexible_schedule, expected_work_hours, attendance_code, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    check_in_time=VALUES(check_in_time),
                    check_out_time=VALUES(check_out_time),
                    work_duration_seconds=VALUES(work_duration_seconds),
                    is_complete=VALUES(is_complete),
                    is_late_arrival=VALUES(is_late_arrival),
                    is_early_departure=VALUES(is_early_departure),
                    is_overtime=VALUES(is_overtime),
                    is_early_arrival=VALUES(is_early_arrival),
                    late_minutes=VALUES(late_minutes),
                    early_departure_minutes=VALUES(early_departure_minutes),
                    overtime_minutes=VALUES(overtime_minutes),
                    early_arrival_minutes=VALUES(early_arrival_minutes),
                    is_flexible_schedule=VALUES(is_flexible_schedule),
                    expected_work_hours=VALUES(expected_work_hours),
                    attendance_code=VALUES(attendance_code),
                    notes=VALUES(notes)
                """,
                params,
            )

            # On update lastrowid can be 0; fetch attendance_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT attendance_id FROM attendance WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return int(r["attendance_id"]) if r else 0
