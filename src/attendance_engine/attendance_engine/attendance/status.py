from __future__ import annotations

from datetime import timedelta

from ..core.constants import HALF_DAY_MAX_HOURS
from ..core.enums import DisplayStatus
from .model import AttendanceVerdict

_HALF_DAY = timedelta(hours=HALF_DAY_MAX_HOURS)


def is_half_day(verdict: AttendanceVerdict) -> bool:
    if verdict.work_duration is None:
        return False
    return (verdict.is_late_arrival or verdict.is_early_departure) and verdict.work_duration <= _HALF_DAY


def display_status(verdict: AttendanceVerdict) -> DisplayStatus:
    """Human-readable status; a short late/early day reads "Half Day" whatever flag caused it."""

    if is_half_day(verdict):
        return DisplayStatus.HALF_DAY
    if verdict.is_late_arrival and verdict.is_early_departure:
        return DisplayStatus.LATE_AND_LEFT_EARLY
    if verdict.is_late_arrival:
        return DisplayStatus.LATE
    if verdict.is_early_departure:
        return DisplayStatus.LEFT_EARLY
    if verdict.is_early_arrival:
        return DisplayStatus.EARLY_ARRIVAL
    if verdict.is_overtime:
        return DisplayStatus.OVERTIME
    if verdict.is_complete:
        return DisplayStatus.COMPLETE
    if verdict.has_check_in:
        return DisplayStatus.CHECKED_IN
    return DisplayStatus.NOT_STARTED
