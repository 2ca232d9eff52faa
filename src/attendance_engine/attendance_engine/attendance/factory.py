from __future__ import annotations

from dataclasses import dataclass

from .model import ClassificationInput
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.fixed_strategy import FixedStrategy
from .strategies.flexible_strategy import FlexibleStrategy
from .strategies.in_progress_strategy import InProgressStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_input(self, inp: ClassificationInput) -> AttendanceStrategy:
        if inp.check_in_time is None and inp.check_out_time is None:
            return AbsentStrategy()
        if inp.check_out_time is None:
            return InProgressStrategy()
        if inp.is_flexible_schedule:
            return FlexibleStrategy()
        return FixedStrategy()
