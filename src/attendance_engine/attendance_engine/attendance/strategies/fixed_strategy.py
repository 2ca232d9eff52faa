from __future__ import annotations

from ...core.constants import SHORT_DAY_FACTOR
from ...core.enums import AttendanceCode
from ...core.exceptions import MissingSchedule
from ..model import AttendanceVerdict, ClassificationInput
from .base import AttendanceStrategy, to_minutes


def _code(*, late: bool, early_departure: bool, overtime: bool, early_arrival: bool) -> AttendanceCode:
    if late and early_departure:
        return AttendanceCode.LATE_AND_EARLY
    if late:
        return AttendanceCode.LATE
    if early_departure:
        return AttendanceCode.EARLY_DEPARTURE
    if overtime:
        return AttendanceCode.OVERTIME
    if early_arrival:
        return AttendanceCode.EARLY_ARRIVAL
    return AttendanceCode.PRESENT


class FixedStrategy(AttendanceStrategy):
    """Arrival and departure judged against the scheduled start/end, with the flex allowance."""

    def classify(self, inp: ClassificationInput) -> AttendanceVerdict:
        start, end = inp.schedule_start, inp.schedule_end
        if start is None or end is None:
            raise MissingSchedule("Fixed-schedule day without scheduled start/end")

        if inp.is_short_day:
            end = start + (end - start) * SHORT_DAY_FACTOR

        allowance = inp.flex_allowance_minutes
        arrival_variance = to_minutes(inp.check_in_time - start)
        departure_variance = to_minutes(inp.check_out_time - end)

        late = arrival_variance > allowance
        early_arrival = arrival_variance < -allowance
        early_departure = departure_variance < -allowance
        overtime = departure_variance > allowance

        return AttendanceVerdict(
            attendance_code=_code(
                late=late,
                early_departure=early_departure,
                overtime=overtime,
                early_arrival=early_arrival,
            ),
            is_complete=True,
            is_late_arrival=late,
            is_early_departure=early_departure,
            is_overtime=overtime,
            is_early_arrival=early_arrival,
            late_minutes=arrival_variance - allowance if late else None,
            early_departure_minutes=-departure_variance - allowance if early_departure else None,
            overtime_minutes=departure_variance - allowance if overtime else None,
            early_arrival_minutes=-arrival_variance - allowance if early_arrival else None,
            work_duration=inp.check_out_time - inp.check_in_time,
            has_check_in=True,
        )
