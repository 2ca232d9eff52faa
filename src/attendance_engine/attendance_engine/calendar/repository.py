from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import CalendarEntryType
from .model import WorkCalendarEntry


class WorkCalendarRepository(Protocol):
    def list_candidates(self, day: date) -> Sequence[WorkCalendarEntry]:
        """Entries on ``day`` plus recurring entries sharing its month/day."""

        raise NotImplementedError

    def list_range(self, *, start: date, end: date) -> Sequence[WorkCalendarEntry]:
        raise NotImplementedError

    def create(
        self,
        *,
        entry_date: date,
        name: str,
        entry_type: CalendarEntryType,
        is_recurring_annually: bool = False,
        description: str = "",
    ) -> int:
        raise NotImplementedError

    def delete(self, *, entry_id: int) -> bool:
        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[WorkCalendarEntry]:
        raise NotImplementedError
