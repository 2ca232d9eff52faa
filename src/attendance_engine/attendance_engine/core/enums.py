from __future__ import annotations

from enum import Enum


class AttendanceCode(str, Enum):
    """Short attendance classification persisted with each record."""

    PRESENT = "P"
    ABSENT = "A"
    LATE = "L"
    EARLY_DEPARTURE = "E"
    OVERTIME = "O"
    EARLY_ARRIVAL = "EA"
    LATE_AND_EARLY = "LE"
    WORKING = "W"


class DisplayStatus(str, Enum):
    """Human-readable status derived from a verdict (never persisted)."""

    LATE_AND_LEFT_EARLY = "Late & Left Early"
    HALF_DAY = "Half Day"
    LATE = "Late"
    LEFT_EARLY = "Left Early"
    EARLY_ARRIVAL = "Early Arrival"
    OVERTIME = "Overtime"
    COMPLETE = "Complete"
    CHECKED_IN = "Checked In"
    NOT_STARTED = "Not Started"


class CalendarEntryType(str, Enum):
    """Kind of override a work-calendar entry applies to its date."""

    HOLIDAY = "Holiday"
    NON_WORKING_DAY = "NonWorkingDay"
    SHORT_DAY = "ShortDay"
