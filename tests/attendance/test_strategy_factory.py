from __future__ import annotations

from datetime import datetime

from attendance_engine.attendance.factory import AttendanceStrategyFactory
from attendance_engine.attendance.model import ClassificationInput
from attendance_engine.attendance.strategies.absent_strategy import AbsentStrategy
from attendance_engine.attendance.strategies.fixed_strategy import FixedStrategy
from attendance_engine.attendance.strategies.flexible_strategy import FlexibleStrategy
from attendance_engine.attendance.strategies.in_progress_strategy import InProgressStrategy

CHECK_IN = datetime(2025, 1, 6, 9, 0)
CHECK_OUT = datetime(2025, 1, 6, 17, 0)


def _input(check_in, check_out, *, flexible=False) -> ClassificationInput:
    return ClassificationInput(
        check_in_time=check_in,
        check_out_time=check_out,
        expected_work_hours=8.0,
        is_flexible_schedule=flexible,
    )


def test_factory_absent_when_no_punches():
    f = AttendanceStrategyFactory()
    assert isinstance(f.for_input(_input(None, None)), AbsentStrategy)
    assert isinstance(f.for_input(_input(None, None, flexible=True)), AbsentStrategy)


def test_factory_in_progress_without_check_out():
    f = AttendanceStrategyFactory()
    assert isinstance(f.for_input(_input(CHECK_IN, None)), InProgressStrategy)
    assert isinstance(f.for_input(_input(CHECK_IN, None, flexible=True)), InProgressStrategy)


def test_factory_complete_day_by_schedule_mode():
    f = AttendanceStrategyFactory()
    assert isinstance(f.for_input(_input(CHECK_IN, CHECK_OUT)), FixedStrategy)
    assert isinstance(f.for_input(_input(CHECK_IN, CHECK_OUT, flexible=True)), FlexibleStrategy)
