from __future__ import annotations

from datetime import timedelta

from ...core.constants import OVERTIME_FACTOR, UNDERTIME_FACTOR
from ...core.enums import AttendanceCode
from ..model import AttendanceVerdict, ClassificationInput
from .base import AttendanceStrategy, to_minutes


class FlexibleStrategy(AttendanceStrategy):
    """Total hours only; within +/-5% of the expected hours nothing is flagged."""

    def classify(self, inp: ClassificationInput) -> AttendanceVerdict:
        duration = inp.check_out_time - inp.check_in_time
        actual_hours = duration.total_seconds() / 3600
        expected = timedelta(hours=inp.expected_work_hours)

        if actual_hours > inp.expected_work_hours * OVERTIME_FACTOR:
            return AttendanceVerdict(
                attendance_code=AttendanceCode.OVERTIME,
                is_complete=True,
                is_overtime=True,
                overtime_minutes=to_minutes(duration - expected),
                work_duration=duration,
                has_check_in=True,
            )

        if actual_hours < inp.expected_work_hours * UNDERTIME_FACTOR:
            return AttendanceVerdict(
                attendance_code=AttendanceCode.PRESENT,
                is_complete=True,
                is_early_departure=True,
                early_departure_minutes=to_minutes(expected - duration),
                work_duration=duration,
                has_check_in=True,
            )

        return AttendanceVerdict(
            attendance_code=AttendanceCode.PRESENT,
            is_complete=True,
            work_duration=duration,
            has_check_in=True,
        )
