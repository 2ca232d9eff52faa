from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Protocol, Sequence

from ..common.validators import require_non_empty
from ..core.enums import CalendarEntryType
from ..core.exceptions import NotFoundError, ValidationError
from ..schedules.evaluator import is_working_day
from ..schedules.model import WorkSchedule
from .model import WorkCalendarEntry
from .repository import WorkCalendarRepository

logger = logging.getLogger(__name__)

_DAYS_OFF = {CalendarEntryType.HOLIDAY, CalendarEntryType.NON_WORKING_DAY}


class CalendarProvider(Protocol):
    """Yes/no calendar predicates consumed by attendance evaluation."""

    def is_holiday(self, day: date) -> bool:
        raise NotImplementedError

    def is_short_day(self, day: date) -> bool:
        raise NotImplementedError


class WorkCalendarService(CalendarProvider):
    def __init__(self, entries: WorkCalendarRepository):
        self._entries = entries

    def entry_for(self, day: date) -> Optional[WorkCalendarEntry]:
        """Exact-date entry first, then a recurring one."""

        candidates = [e for e in self._entries.list_candidates(day) if e.matches(day)]
        if not candidates:
            return None
        candidates.sort(key=lambda e: (e.entry_date != day, e.entry_id))
        return candidates[0]

    def is_holiday(self, day: date) -> bool:
        """True for Holiday and NonWorkingDay entries: no attendance is expected."""
        entry = self.entry_for(day)
        return entry is not None and entry.entry_type in _DAYS_OFF

    def is_short_day(self, day: date) -> bool:
        entry = self.entry_for(day)
        return entry is not None and entry.entry_type == CalendarEntryType.SHORT_DAY

    def is_working_date(self, day: date, schedule: WorkSchedule) -> bool:
        """A calendar entry decides first; otherwise the schedule's working days."""
        entry = self.entry_for(day)
        if entry is not None:
            return entry.entry_type == CalendarEntryType.SHORT_DAY
        return is_working_day(schedule, day.weekday())

    def list_range(self, *, start: date, end: date) -> Sequence[WorkCalendarEntry]:
        if end < start:
            raise ValidationError("End date must not be before start date")
        return self._entries.list_range(start=start, end=end)

    def add_entry(
        self,
        *,
        entry_date: date,
        name: str,
        entry_type: CalendarEntryType,
        is_recurring_annually: bool = False,
        description: str = "",
    ) -> int:
        name = require_non_empty(name, "Calendar entry name")
        entry_id = self._entries.create(
            entry_date=entry_date,
            name=name,
            entry_type=CalendarEntryType(entry_type),
            is_recurring_annually=bool(is_recurring_annually),
            description=(description or "").strip(),
        )
        logger.info("Added %s calendar entry %s on %s", entry_type, entry_id, entry_date)
        return entry_id

    def delete_entry(self, *, entry_id: int) -> None:
        if not self._entries.delete(entry_id=int(entry_id)):
            raise NotFoundError(f"Calendar entry {entry_id} not found")
