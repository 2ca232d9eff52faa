from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import DEFAULT_FLEX_ALLOWANCE_MINUTES
from ..core.enums import AttendanceCode, DisplayStatus


@dataclass(frozen=True)
class ClassificationInput:
    """Everything the classifier needs for one employee-day.

    ``schedule_start``/``schedule_end`` are absolute datetimes of the fixed
    schedule on the work date (end already moved to the next day for a night
    shift); they are unused on flexible days.
    """

    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    expected_work_hours: float
    is_flexible_schedule: bool
    schedule_start: Optional[datetime] = None
    schedule_end: Optional[datetime] = None
    flex_allowance_minutes: int = DEFAULT_FLEX_ALLOWANCE_MINUTES
    is_short_day: bool = False


@dataclass(frozen=True)
class AttendanceVerdict:
    """Result of classifying one employee-day.

    A ``*_minutes`` field is set exactly when its paired flag is True.
    """

    attendance_code: AttendanceCode
    is_complete: bool = False
    is_late_arrival: bool = False
    is_early_departure: bool = False
    is_overtime: bool = False
    is_early_arrival: bool = False
    late_minutes: Optional[float] = None
    early_departure_minutes: Optional[float] = None
    overtime_minutes: Optional[float] = None
    early_arrival_minutes: Optional[float] = None
    work_duration: Optional[timedelta] = None
    has_check_in: bool = False
    is_flexible_schedule: bool = False
    expected_work_hours: float = 0.0

    @property
    def display_status(self) -> DisplayStatus:
        from .status import display_status

        return display_status(self)


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one persisted attendance row per employee per date."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    verdict: AttendanceVerdict
    notes: str = ""

    @property
    def attendance_code(self) -> AttendanceCode:
        return self.verdict.attendance_code
