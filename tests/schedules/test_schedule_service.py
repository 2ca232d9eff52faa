from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time

import pytest

from attendance_engine.core.exceptions import MissingSchedule, NotFoundError, ValidationError
from attendance_engine.schedules.model import FixedHours, FlexibleHours, WorkSchedule

MONDAY = date(2025, 1, 6)
SATURDAY = date(2025, 1, 11)


def _new_schedule(**overrides) -> WorkSchedule:
    values = dict(
        schedule_id=0,
        name="  Early shift ",
        mode=FixedHours(start_time=time(7, 0), end_time=time(15, 0)),
        description=" warehouse ",
    )
    values.update(overrides)
    return WorkSchedule(**values)


def test_department_default_applies_without_override(container, repos):
    employee = repos.employees.get_by_id(1)
    assert container.schedule_service.resolve_for_employee(employee).schedule_id == 1


def test_employee_override_wins_over_department(container, repos):
    employee = repos.employees.get_by_id(2)
    assert container.schedule_service.resolve_for_employee(employee).schedule_id == 2


def test_dangling_override_falls_back_to_department(container, repos):
    employee = replace(repos.employees.get_by_id(1), work_schedule_id=404)
    assert container.schedule_service.resolve_for_employee(employee).schedule_id == 1


def test_unresolvable_schedule_raises(container, repos):
    with pytest.raises(MissingSchedule):
        container.schedule_service.resolve_for_employee(repos.employees.get_by_id(4))


def test_allowed_attendance_times_apply_allowance(container, repos):
    latest_in, earliest_out = container.schedule_service.allowed_attendance_times(repos.employees.get_by_id(1), MONDAY)
    assert latest_in == datetime(2025, 1, 6, 9, 15)
    assert earliest_out == datetime(2025, 1, 6, 16, 45)


def test_allowed_attendance_times_empty_for_weekend_and_flexible(container, repos):
    service = container.schedule_service
    assert service.allowed_attendance_times(repos.employees.get_by_id(1), SATURDAY) == (None, None)
    assert service.allowed_attendance_times(repos.employees.get_by_id(2), MONDAY) == (None, None)


def test_create_strips_and_persists(container, repos):
    schedule_id = container.schedule_service.create(_new_schedule())
    stored = repos.schedules.get_by_id(schedule_id)
    assert stored.name == "Early shift"
    assert stored.description == "warehouse"


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"flex_allowance_minutes": -1},
        {"mode": FixedHours(start_time=time(9, 0), end_time=time(9, 0))},
        {"mode": FlexibleHours(total_work_hours=0)},
        {"mode": FlexibleHours(total_work_hours=25)},
    ],
)
def test_create_rejects_invalid_schedules(container, overrides):
    with pytest.raises(ValidationError):
        container.schedule_service.create(_new_schedule(**overrides))


def test_update_and_delete_unknown_schedule(container):
    with pytest.raises(NotFoundError):
        container.schedule_service.update(_new_schedule(schedule_id=77))
    with pytest.raises(NotFoundError):
        container.schedule_service.delete(schedule_id=77)


def test_assign_to_employee_changes_resolution(container, repos):
    container.schedule_service.assign_to_employee(schedule_id=3, employee_id=1)
    employee = repos.employees.get_by_id(1)
    assert employee.work_schedule_id == 3
    assert container.schedule_service.resolve_for_employee(employee).name == "Night"


def test_assign_unknown_targets(container):
    with pytest.raises(NotFoundError):
        container.schedule_service.assign_to_employee(schedule_id=99, employee_id=1)
    with pytest.raises(NotFoundError):
        container.schedule_service.assign_to_employee(schedule_id=1, employee_id=99)
    with pytest.raises(NotFoundError):
        container.schedule_service.assign_to_department(schedule_id=99, department_id=1)


def test_assign_to_department_gives_department_a_schedule(container, repos):
    container.schedule_service.assign_to_department(schedule_id=2, department_id=99)
    assert container.schedule_service.resolve_for_employee(repos.employees.get_by_id(4)).schedule_id == 2
