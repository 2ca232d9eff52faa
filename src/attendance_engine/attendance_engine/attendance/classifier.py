"""Attendance Classifier.

Turns one day's check-in/check-out pair plus the evaluated schedule
parameters into an ``AttendanceVerdict``. Pure and stateless: safe to call
concurrently and to re-run on the same input.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..core.exceptions import InvalidTimeOrdering, ValidationError
from .factory import AttendanceStrategyFactory
from .model import AttendanceVerdict, ClassificationInput


class AttendanceClassifier:
    def __init__(self, strategy_factory: Optional[AttendanceStrategyFactory] = None):
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def classify(self, inp: ClassificationInput) -> AttendanceVerdict:
        validate_input(inp)
        verdict = self._factory.for_input(inp).classify(inp)
        return replace(
            verdict,
            is_flexible_schedule=inp.is_flexible_schedule,
            expected_work_hours=inp.expected_work_hours,
        )


def validate_input(inp: ClassificationInput) -> None:
    stamps = [t for t in (inp.check_in_time, inp.check_out_time, inp.schedule_start, inp.schedule_end) if t is not None]
    if len({t.tzinfo is None for t in stamps}) > 1:
        raise ValidationError("Timestamps must be all naive or all offset-aware")
    if inp.check_out_time is not None and inp.check_in_time is None:
        raise ValidationError("Check-out recorded without a check-in")
    if inp.check_out_time is not None and inp.check_out_time < inp.check_in_time:
        raise InvalidTimeOrdering(
            f"Check-out {inp.check_out_time:%Y-%m-%d %H:%M} precedes check-in {inp.check_in_time:%Y-%m-%d %H:%M}"
        )
    if inp.expected_work_hours < 0:
        raise ValidationError("Expected work hours must not be negative")


_default = AttendanceClassifier()


def classify(inp: ClassificationInput) -> AttendanceVerdict:
    return _default.classify(inp)
