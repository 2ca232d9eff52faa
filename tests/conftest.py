from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from types import SimpleNamespace
from typing import Optional

import pytest

from attendance_engine.attendance.model import AttendanceRecord, AttendanceVerdict
from attendance_engine.calendar.model import WorkCalendarEntry
from attendance_engine.calendar.service import WorkCalendarService
from attendance_engine.container import wire
from attendance_engine.employees.department_model import Department
from attendance_engine.employees.model import Employee
from attendance_engine.schedules.model import FixedHours, FlexibleHours, WorkingDays, WorkSchedule

# 2025-01-06 is a Monday.
MONDAY = date(2025, 1, 6)
SATURDAY = date(2025, 1, 11)


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_active(self):
        return [e for e in self._by_id.values() if e.is_active]

    def set_work_schedule(self, employee_id: int, *, work_schedule_id: Optional[int]) -> bool:
        employee = self._by_id.get(employee_id)
        if not employee:
            return False
        self._by_id[employee_id] = replace(employee, work_schedule_id=work_schedule_id)
        return True


class InMemoryDepartments:
    def __init__(self, departments=()):
        self._by_id = {d.department_id: d for d in departments}

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda d: d.name)

    def get_by_id(self, department_id: int):
        return self._by_id.get(department_id)


class InMemorySchedules:
    def __init__(self, schedules=()):
        self._by_id = {s.schedule_id: s for s in schedules}

    def get_by_id(self, schedule_id: int) -> Optional[WorkSchedule]:
        return self._by_id.get(schedule_id)

    def list_all(self):
        return [self._by_id[k] for k in sorted(self._by_id)]

    def list_for_department(self, department_id: int):
        return [s for s in self.list_all() if s.department_id == department_id]

    def create(self, schedule: WorkSchedule) -> int:
        schedule_id = max(self._by_id, default=0) + 1
        self._by_id[schedule_id] = replace(schedule, schedule_id=schedule_id)
        return schedule_id

    def update(self, schedule: WorkSchedule) -> bool:
        if schedule.schedule_id not in self._by_id:
            return False
        self._by_id[schedule.schedule_id] = schedule
        return True

    def delete(self, *, schedule_id: int) -> bool:
        return self._by_id.pop(schedule_id, None) is not None

    def set_department(self, *, schedule_id: int, department_id: Optional[int]) -> bool:
        schedule = self._by_id.get(schedule_id)
        if not schedule:
            return False
        self._by_id[schedule_id] = replace(schedule, department_id=department_id)
        return True


class InMemoryCalendarEntries:
    def __init__(self, entries=()):
        self._by_id = {e.entry_id: e for e in entries}

    def list_candidates(self, day: date):
        return [e for e in self._by_id.values() if e.matches(day)]

    def list_range(self, *, start: date, end: date):
        return sorted((e for e in self._by_id.values() if start <= e.entry_date <= end), key=lambda e: e.entry_date)

    def create(self, *, entry_date, name, entry_type, is_recurring_annually=False, description="") -> int:
        entry_id = max(self._by_id, default=0) + 1
        self._by_id[entry_id] = WorkCalendarEntry(
            entry_id=entry_id,
            entry_date=entry_date,
            name=name,
            entry_type=entry_type,
            is_recurring_annually=is_recurring_annually,
            description=description,
        )
        return entry_id

    def delete(self, *, entry_id: int) -> bool:
        return self._by_id.pop(entry_id, None) is not None

    def get_by_id(self, entry_id: int):
        return self._by_id.get(entry_id)


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self.saves = 0

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def get_recent_for_employee(self, employee_id: int, limit: int):
        items = [r for r in self._by_key.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def list_range(self, *, employee_id: int, start_date: date, end_date: date):
        items = [
            r for r in self._by_key.values() if r.employee_id == employee_id and start_date <= r.work_date <= end_date
        ]
        return sorted(items, key=lambda r: r.work_date)

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
        self.saves += 1
        existing = self._by_key.get((employee_id, work_date))
        if existing:
            attendance_id = existing.attendance_id
        else:
            self._id += 1
            attendance_id = self._id
        self._by_key[(employee_id, work_date)] = AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=employee_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            verdict=verdict,
            notes=notes,
        )
        return attendance_id


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 6, 9, 0, 0)


@pytest.fixture
def office_schedule() -> WorkSchedule:
    return WorkSchedule(
        schedule_id=1,
        name="Office",
        mode=FixedHours(start_time=time(9, 0), end_time=time(17, 0)),
        flex_allowance_minutes=15,
        department_id=1,
    )


@pytest.fixture
def flexible_schedule() -> WorkSchedule:
    return WorkSchedule(
        schedule_id=2,
        name="Flexible 8h",
        mode=FlexibleHours(total_work_hours=8.0),
        working_days=WorkingDays.from_mask("1111110"),
    )


@pytest.fixture
def night_schedule() -> WorkSchedule:
    return WorkSchedule(
        schedule_id=3,
        name="Night",
        mode=FixedHours(start_time=time(22, 0), end_time=time(6, 0)),
        flex_allowance_minutes=10,
    )


@pytest.fixture
def employees() -> list[Employee]:
    return [
        # Falls back to department 1's schedule.
        Employee(employee_id=1, full_name="Fixed Worker", employee_code="E001", department_id=1),
        Employee(employee_id=2, full_name="Flex Schedule", employee_code="E002", department_id=1, work_schedule_id=2),
        Employee(
            employee_id=3,
            full_name="Flex Hours",
            employee_code="E003",
            department_id=1,
            is_flexible_hours=True,
            required_work_hours_per_day=6.0,
        ),
        Employee(employee_id=4, full_name="No Schedule", employee_code="E004", department_id=99),
        Employee(employee_id=5, full_name="Night Worker", employee_code="E005", department_id=1, work_schedule_id=3),
    ]


@pytest.fixture
def repos(employees, office_schedule, flexible_schedule, night_schedule):
    return SimpleNamespace(
        employees=InMemoryEmployees(employees),
        departments=InMemoryDepartments([Department(1, "Operations"), Department(99, "Unassigned")]),
        schedules=InMemorySchedules([office_schedule, flexible_schedule, night_schedule]),
        calendar=InMemoryCalendarEntries(),
        attendance=InMemoryAttendance(),
    )


@pytest.fixture
def container(repos):
    return wire(
        employees_repo=repos.employees,
        departments_repo=repos.departments,
        schedules_repo=repos.schedules,
        attendance_repo=repos.attendance,
        calendar_service=WorkCalendarService(repos.calendar),
    )
