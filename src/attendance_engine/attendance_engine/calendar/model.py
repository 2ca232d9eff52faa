from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import CalendarEntryType


@dataclass(frozen=True)
class WorkCalendarEntry:
    """Date-keyed override of the normal working pattern."""

    entry_id: int
    entry_date: date
    name: str
    entry_type: CalendarEntryType
    is_recurring_annually: bool = False
    description: str = ""

    def matches(self, day: date) -> bool:
        if self.entry_date == day:
            return True
        return self.is_recurring_annually and (self.entry_date.month, self.entry_date.day) == (day.month, day.day)
