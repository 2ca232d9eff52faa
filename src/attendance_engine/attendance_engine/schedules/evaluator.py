"""Schedule Evaluator.

Pure functions deciding whether a date is a working day for a schedule and
how many hours are expected on it. Holiday handling belongs to the caller;
only the short-day scaling is offered here.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Tuple

from ..core.constants import SHORT_DAY_FACTOR
from .model import FixedHours, WorkSchedule

_DAY = timedelta(hours=24)


def is_working_day(schedule: WorkSchedule, weekday: int) -> bool:
    return schedule.working_days.is_working(weekday)


def fixed_span(mode: FixedHours) -> timedelta:
    """Length of a fixed shift; a shift ending before it starts wraps to the next day."""
    start = timedelta(hours=mode.start_time.hour, minutes=mode.start_time.minute, seconds=mode.start_time.second)
    end = timedelta(hours=mode.end_time.hour, minutes=mode.end_time.minute, seconds=mode.end_time.second)
    if mode.spans_midnight:
        end += _DAY
    return end - start


def expected_work_hours(schedule: WorkSchedule, day: date, *, is_short_day: bool = False) -> float:
    if not is_working_day(schedule, day.weekday()):
        return 0.0

    if isinstance(schedule.mode, FixedHours):
        hours = fixed_span(schedule.mode).total_seconds() / 3600
    else:
        hours = float(schedule.mode.total_work_hours)

    if is_short_day:
        hours *= SHORT_DAY_FACTOR
    return hours


def schedule_window(schedule: WorkSchedule, day: date) -> Optional[Tuple[datetime, datetime]]:
    """Scheduled start/end on ``day`` for a fixed schedule, None for a flexible one."""
    if not isinstance(schedule.mode, FixedHours):
        return None

    start = datetime.combine(day, schedule.mode.start_time)
    return start, start + fixed_span(schedule.mode)
