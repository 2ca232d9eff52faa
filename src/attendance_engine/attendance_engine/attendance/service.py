from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from ..calendar.service import CalendarProvider
from ..common.datetime_utils import iter_dates, now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, SHORT_DAY_FACTOR
from ..core.enums import DisplayStatus
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..punches.reader import PunchReader
from ..schedules.evaluator import expected_work_hours, is_working_day, schedule_window
from ..schedules.model import FixedHours, WorkSchedule
from ..schedules.service import ScheduleService
from .classifier import AttendanceClassifier
from .model import AttendanceRecord, ClassificationInput
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceStatistics:
    total_working_days: int = 0
    days_present: int = 0
    days_absent: int = 0
    late_arrivals: int = 0
    early_departures: int = 0


@dataclass
class SyncResult:
    recorded: List[AttendanceRecord] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)
    failed: Dict[int, str] = field(default_factory=dict)


_CSS = {
    DisplayStatus.COMPLETE: "bg-success",
    DisplayStatus.OVERTIME: "bg-success",
    DisplayStatus.EARLY_ARRIVAL: "bg-primary",
    DisplayStatus.LATE: "bg-danger",
    DisplayStatus.LATE_AND_LEFT_EARLY: "bg-danger",
    DisplayStatus.LEFT_EARLY: "bg-warning text-dark",
    DisplayStatus.HALF_DAY: "bg-warning text-dark",
    DisplayStatus.CHECKED_IN: "bg-info text-dark",
    DisplayStatus.NOT_STARTED: "bg-secondary",
}


def employee_expected_hours(employee: Employee, schedule: WorkSchedule, day: date, *, is_short_day: bool) -> float:
    """Expected hours before holiday handling; a flexible employee's own requirement wins."""

    if not employee.is_flexible_hours:
        return expected_work_hours(schedule, day, is_short_day=is_short_day)

    if not is_working_day(schedule, day.weekday()):
        return 0.0
    hours = float(employee.required_work_hours_per_day)
    return hours * SHORT_DAY_FACTOR if is_short_day else hours


def build_input(
    employee: Employee,
    schedule: WorkSchedule,
    day: date,
    check_in: Optional[datetime],
    check_out: Optional[datetime],
    *,
    is_holiday: bool = False,
    is_short_day: bool = False,
) -> ClassificationInput:
    is_flexible = employee.is_flexible_hours or schedule.is_flexible
    expected = 0.0 if is_holiday else employee_expected_hours(employee, schedule, day, is_short_day=is_short_day)
    window = None if is_flexible else schedule_window(schedule, day)

    return ClassificationInput(
        check_in_time=check_in,
        check_out_time=check_out,
        expected_work_hours=expected,
        is_flexible_schedule=is_flexible,
        schedule_start=window[0] if window else None,
        schedule_end=window[1] if window else None,
        flex_allowance_minutes=schedule.flex_allowance_minutes,
        is_short_day=is_short_day,
    )


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        schedules: ScheduleService,
        calendar: CalendarProvider,
        *,
        classifier: AttendanceClassifier | None = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._schedules = schedules
        self._calendar = calendar
        self._classifier = classifier or AttendanceClassifier()

    def _get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def expected_hours_for(self, employee_id: int, day: date) -> float:
        employee = self._get_employee(employee_id)
        schedule = self._schedules.resolve_for_employee(employee)
        if self._calendar.is_holiday(day):
            return 0.0
        return employee_expected_hours(employee, schedule, day, is_short_day=self._calendar.is_short_day(day))

    def record_day(
        self,
        employee_id: int,
        day: date,
        *,
        check_in: Optional[datetime] = None,
        check_out: Optional[datetime] = None,
        notes: str = "",
    ) -> Optional[AttendanceRecord]:
        """Classify and persist one employee-day.

        Returns None without writing anything when the day has no punches and
        no attendance is expected (holiday or non-working weekday).
        """

        employee = self._get_employee(employee_id)
        schedule = self._schedules.resolve_for_employee(employee)
        is_holiday = self._calendar.is_holiday(day)
        is_short_day = self._calendar.is_short_day(day)

        if check_in is None and check_out is None:
            if is_holiday or not is_working_day(schedule, day.weekday()):
                logger.debug("No attendance expected for employee %s on %s", employee.employee_id, day)
                return None

        inp = build_input(
            employee,
            schedule,
            day,
            check_in,
            check_out,
            is_holiday=is_holiday,
            is_short_day=is_short_day,
        )
        verdict = self._classifier.classify(inp)

        notes = (notes or "").strip()
        attendance_id = self._attendance.save(
            employee_id=employee.employee_id,
            work_date=day,
            check_in_time=check_in,
            check_out_time=check_out,
            verdict=verdict,
            notes=notes,
        )
        logger.info(
            "Recorded attendance %s for employee %s on %s: %s",
            attendance_id,
            employee.employee_id,
            day,
            verdict.attendance_code.value,
        )
        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=employee.employee_id,
            work_date=day,
            check_in_time=check_in,
            check_out_time=check_out,
            verdict=verdict,
            notes=notes,
        )

    def check_in(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        existing = self._attendance.get_for_employee_and_date(employee_id, today)
        if existing and existing.check_in_time is not None:
            raise ValidationError("Already checked in today")

        return self.record_day(employee_id, today, check_in=now)

    def check_out(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        employee = self._get_employee(employee_id)
        schedule = self._schedules.resolve_for_employee(employee)
        spans_midnight = isinstance(schedule.mode, FixedHours) and schedule.mode.spans_midnight

        record = self._open_record(employee.employee_id, now, look_back=spans_midnight)
        if record is None:
            raise ValidationError("No open check-in to close")

        return self.record_day(
            employee_id,
            record.work_date,
            check_in=record.check_in_time,
            check_out=now,
            notes=record.notes,
        )

    def _open_record(self, employee_id: int, now: datetime, *, look_back: bool) -> Optional[AttendanceRecord]:
        # Only a night shift is closed on the calendar day after its check-in.
        days = (now.date(), now.date() - timedelta(days=1)) if look_back else (now.date(),)
        for day in days:
            record = self._attendance.get_for_employee_and_date(employee_id, day)
            if record and record.check_in_time is not None and record.check_out_time is None:
                return record
        return None

    def sync_from_reader(self, reader: PunchReader, day: date) -> SyncResult:
        """Classify every employee-day a punch reader supplies for ``day``."""

        result = SyncResult()
        for punches in reader.read_day(day):
            try:
                record = self.record_day(
                    punches.employee_id,
                    punches.work_date,
                    check_in=punches.check_in,
                    check_out=punches.check_out,
                )
            except DomainError as e:
                logger.warning("Skipping punches of employee %s on %s: %s", punches.employee_id, punches.work_date, e)
                result.failed[punches.employee_id] = str(e)
                continue

            if record is None:
                result.skipped.append(punches.employee_id)
            else:
                result.recorded.append(record)

        logger.info(
            "Punch sync for %s: %d recorded, %d skipped, %d failed",
            day,
            len(result.recorded),
            len(result.skipped),
            len(result.failed),
        )
        return result

    def get_statistics(self, employee_id: int, start: date, end: date) -> AttendanceStatistics:
        if end < start:
            raise ValidationError("End date must not be before start date")

        employee = self._get_employee(employee_id)
        schedule = self._schedules.resolve_for_employee(employee)
        records = {
            r.work_date: r
            for r in self._attendance.list_range(employee_id=employee.employee_id, start_date=start, end_date=end)
        }

        total = present = absent = late = early = 0
        for day in iter_dates(start, end):
            if employee.hire_date and day < employee.hire_date:
                continue
            if self._calendar.is_holiday(day) or not is_working_day(schedule, day.weekday()):
                continue

            total += 1
            record = records.get(day)
            if record is None or record.check_in_time is None:
                absent += 1
                continue

            present += 1
            if record.verdict.is_late_arrival:
                late += 1
            if record.verdict.is_early_departure:
                early += 1

        return AttendanceStatistics(
            total_working_days=total,
            days_present=present,
            days_absent=absent,
            late_arrivals=late,
            early_departures=early,
        )

    def get_history_ui(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT):
        rows = self._attendance.get_recent_for_employee(employee_id, limit)
        return [self._to_ui(r) for r in rows]

    def get_today_record(self, employee_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(employee_id, today)

    def _to_ui(self, r: AttendanceRecord) -> dict:
        status = r.verdict.display_status
        return {
            "date": r.work_date.strftime("%Y-%m-%d"),
            "check_in": r.check_in_time.strftime("%H:%M:%S") if r.check_in_time else "-",
            "check_out": r.check_out_time.strftime("%H:%M:%S") if r.check_out_time else "-",
            "code": r.verdict.attendance_code.value,
            "status": status.value,
            "css_class": _CSS.get(status, "bg-secondary"),
        }
