from __future__ import annotations

from ...core.enums import AttendanceCode
from ..model import AttendanceVerdict, ClassificationInput
from .base import AttendanceStrategy


class AbsentStrategy(AttendanceStrategy):
    """No punches at all."""

    def classify(self, inp: ClassificationInput) -> AttendanceVerdict:
        return AttendanceVerdict(attendance_code=AttendanceCode.ABSENT)
