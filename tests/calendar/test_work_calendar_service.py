from __future__ import annotations

from datetime import date

import pytest

from attendance_engine.core.enums import CalendarEntryType
from attendance_engine.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def calendar(container):
    return container.calendar_service


def test_no_entry_follows_schedule_working_days(calendar, office_schedule, flexible_schedule):
    assert calendar.is_working_date(date(2025, 1, 6), office_schedule)
    assert not calendar.is_working_date(date(2025, 1, 11), office_schedule)
    # Monday-to-Saturday mask.
    assert calendar.is_working_date(date(2025, 1, 11), flexible_schedule)
    assert not calendar.is_working_date(date(2025, 1, 12), flexible_schedule)
    assert not calendar.is_holiday(date(2025, 1, 6))
    assert not calendar.is_short_day(date(2025, 1, 6))


def test_holiday_and_non_working_day_are_days_off(calendar, office_schedule):
    calendar.add_entry(entry_date=date(2025, 1, 7), name="Holiday", entry_type=CalendarEntryType.HOLIDAY)
    calendar.add_entry(entry_date=date(2025, 1, 8), name="Bridge", entry_type=CalendarEntryType.NON_WORKING_DAY)

    assert calendar.is_holiday(date(2025, 1, 7))
    assert calendar.is_holiday(date(2025, 1, 8))
    assert not calendar.is_working_date(date(2025, 1, 7), office_schedule)


def test_short_day_is_a_working_day(calendar, office_schedule):
    calendar.add_entry(entry_date=date(2025, 1, 11), name="Pre-holiday", entry_type=CalendarEntryType.SHORT_DAY)

    assert calendar.is_short_day(date(2025, 1, 11))
    assert not calendar.is_holiday(date(2025, 1, 11))
    assert calendar.is_working_date(date(2025, 1, 11), office_schedule)


def test_recurring_entry_matches_every_year(calendar):
    calendar.add_entry(
        entry_date=date(2020, 1, 1),
        name="New Year",
        entry_type=CalendarEntryType.HOLIDAY,
        is_recurring_annually=True,
    )
    assert calendar.is_holiday(date(2025, 1, 1))
    assert not calendar.is_holiday(date(2025, 1, 2))


def test_exact_date_entry_beats_recurring_one(calendar):
    calendar.add_entry(
        entry_date=date(2020, 12, 31),
        name="Year end",
        entry_type=CalendarEntryType.HOLIDAY,
        is_recurring_annually=True,
    )
    calendar.add_entry(entry_date=date(2025, 12, 31), name="Year end 2025", entry_type=CalendarEntryType.SHORT_DAY)

    assert calendar.entry_for(date(2025, 12, 31)).name == "Year end 2025"
    assert calendar.is_short_day(date(2025, 12, 31))
    assert calendar.is_holiday(date(2026, 12, 31))


def test_add_entry_validates_name(calendar):
    with pytest.raises(ValidationError):
        calendar.add_entry(entry_date=date(2025, 1, 7), name=" ", entry_type=CalendarEntryType.HOLIDAY)


def test_list_range_and_delete(calendar):
    entry_id = calendar.add_entry(entry_date=date(2025, 5, 1), name="Labour Day", entry_type=CalendarEntryType.HOLIDAY)

    assert [e.entry_id for e in calendar.list_range(start=date(2025, 5, 1), end=date(2025, 5, 31))] == [entry_id]
    with pytest.raises(ValidationError):
        calendar.list_range(start=date(2025, 5, 31), end=date(2025, 5, 1))

    calendar.delete_entry(entry_id=entry_id)
    assert not calendar.is_holiday(date(2025, 5, 1))
    with pytest.raises(NotFoundError):
        calendar.delete_entry(entry_id=entry_id)
