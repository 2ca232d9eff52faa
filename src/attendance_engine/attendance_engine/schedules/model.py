from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Optional, Tuple, Union

from ..core.constants import DEFAULT_FLEX_ALLOWANCE_MINUTES
from ..core.exceptions import UnmappedWeekday, ValidationError

WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


@dataclass(frozen=True)
class FixedHours:
    """Fixed schedule: attendance is judged against start/end times."""

    start_time: time
    end_time: time

    @property
    def spans_midnight(self) -> bool:
        return self.end_time < self.start_time


@dataclass(frozen=True)
class FlexibleHours:
    """Flexible schedule: only the total hours worked matter."""

    total_work_hours: float


ScheduleMode = Union[FixedHours, FlexibleHours]


@dataclass(frozen=True)
class WorkingDays:
    """Seven working-day flags, Monday first (``date.weekday()`` order)."""

    flags: Tuple[bool, bool, bool, bool, bool, bool, bool] = (True, True, True, True, True, False, False)

    def __post_init__(self):
        if len(self.flags) != 7:
            raise ValidationError("Working days must hold exactly 7 flags")

    def is_working(self, weekday: int) -> bool:
        if not 0 <= weekday <= 6:
            raise UnmappedWeekday(f"Weekday index out of range: {weekday!r}")
        return bool(self.flags[weekday])

    @classmethod
    def from_mask(cls, mask: str) -> "WorkingDays":
        """Build from a storage mask such as ``"1111100"``."""
        mask = (mask or "").strip()
        if len(mask) != 7 or set(mask) - {"0", "1"}:
            raise ValidationError(f"Invalid working-day mask: {mask!r}")
        return cls(tuple(ch == "1" for ch in mask))

    def to_mask(self) -> str:
        return "".join("1" if f else "0" for f in self.flags)


@dataclass(frozen=True)
class WorkSchedule:
    """Domain entity: named work policy, department-wide or employee-specific."""

    schedule_id: int
    name: str
    mode: ScheduleMode
    working_days: WorkingDays = field(default_factory=WorkingDays)
    flex_allowance_minutes: int = DEFAULT_FLEX_ALLOWANCE_MINUTES
    department_id: Optional[int] = None
    description: str = ""

    @property
    def is_flexible(self) -> bool:
        return isinstance(self.mode, FlexibleHours)
