from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Protocol


@dataclass(frozen=True)
class DailyPunches:
    """One employee's check-in/check-out pair for a day, already reduced from raw punches."""

    employee_id: int
    work_date: date
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None


class PunchReader(Protocol):
    """Source of daily punch pairs (terminal sync, file import, ...)."""

    def read_day(self, day: date) -> Iterable[DailyPunches]:
        raise NotImplementedError
