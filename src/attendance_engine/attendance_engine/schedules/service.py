from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

from ..common.validators import require_hours_in_day, require_non_empty, require_non_negative
from ..core.exceptions import MissingSchedule, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .evaluator import is_working_day, schedule_window
from .model import FixedHours, WorkSchedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository, employees: EmployeeRepository):
        self._schedules = schedules
        self._employees = employees

    def resolve_for_employee(self, employee: Employee) -> WorkSchedule:
        """Employee-specific schedule first, then the department default."""

        if employee.work_schedule_id is not None:
            schedule = self._schedules.get_by_id(employee.work_schedule_id)
            if schedule:
                return schedule
            logger.warning(
                "Employee %s references missing schedule %s, falling back to department",
                employee.employee_id,
                employee.work_schedule_id,
            )

        department_schedules = self._schedules.list_for_department(employee.department_id)
        if department_schedules:
            return department_schedules[0]

        raise MissingSchedule(f"No work schedule for employee {employee.employee_id}")

    def allowed_attendance_times(
        self, employee: Employee, day: date
    ) -> Tuple[Optional[datetime], Optional[datetime]]:
        """Latest allowed check-in and earliest allowed check-out on ``day``."""

        schedule = self.resolve_for_employee(employee)
        window = schedule_window(schedule, day)
        if window is None or not is_working_day(schedule, day.weekday()):
            return None, None

        allowance = timedelta(minutes=schedule.flex_allowance_minutes)
        start, end = window
        return start + allowance, end - allowance

    def create(self, schedule: WorkSchedule) -> int:
        schedule = self._validated(schedule)
        schedule_id = self._schedules.create(schedule)
        logger.info("Created work schedule %s (%s)", schedule_id, schedule.name)
        return schedule_id

    def update(self, schedule: WorkSchedule) -> None:
        schedule = self._validated(schedule)
        if self._schedules.get_by_id(schedule.schedule_id) is None:
            raise NotFoundError(f"Work schedule {schedule.schedule_id} not found")
        self._schedules.update(schedule)

    def delete(self, *, schedule_id: int) -> None:
        if not self._schedules.delete(schedule_id=int(schedule_id)):
            raise NotFoundError(f"Work schedule {schedule_id} not found")

    def assign_to_employee(self, *, schedule_id: int, employee_id: int) -> None:
        if self._schedules.get_by_id(int(schedule_id)) is None:
            raise NotFoundError(f"Work schedule {schedule_id} not found")
        if not self._employees.set_work_schedule(int(employee_id), work_schedule_id=int(schedule_id)):
            raise NotFoundError(f"Employee {employee_id} not found")

    def assign_to_department(self, *, schedule_id: int, department_id: int) -> None:
        if not self._schedules.set_department(schedule_id=int(schedule_id), department_id=int(department_id)):
            raise NotFoundError(f"Work schedule {schedule_id} not found")

    def _validated(self, schedule: WorkSchedule) -> WorkSchedule:
        name = require_non_empty(schedule.name, "Schedule name")
        require_non_negative(schedule.flex_allowance_minutes, "Flex allowance minutes")

        if isinstance(schedule.mode, FixedHours):
            if schedule.mode.start_time == schedule.mode.end_time:
                raise ValidationError("Start and end time must differ")
        else:
            require_hours_in_day(schedule.mode.total_work_hours, "Total work hours")

        return replace(schedule, name=name, description=(schedule.description or "").strip())
