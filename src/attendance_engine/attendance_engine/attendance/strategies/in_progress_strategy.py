from __future__ import annotations

from ...core.enums import AttendanceCode
from ..model import AttendanceVerdict, ClassificationInput
from .base import AttendanceStrategy


class InProgressStrategy(AttendanceStrategy):
    """Checked in, not yet checked out: nothing is judged on a partial day."""

    def classify(self, inp: ClassificationInput) -> AttendanceVerdict:
        return AttendanceVerdict(attendance_code=AttendanceCode.WORKING, has_check_in=True)
