"""Example: classify a day directly with the engine (no database, no Flask)."""

from datetime import date, datetime, time

from attendance_engine.attendance.classifier import classify
from attendance_engine.attendance.service import build_input
from attendance_engine.employees.model import Employee
from attendance_engine.schedules.model import FixedHours, WorkSchedule


def main():
    schedule = WorkSchedule(schedule_id=1, name="Office", mode=FixedHours(time(9, 0), time(17, 0)))
    employee = Employee(employee_id=1, full_name="A", employee_code="E001", department_id=1, work_schedule_id=1)
    day = date(2025, 1, 6)

    inp = build_input(employee, schedule, day, datetime(2025, 1, 6, 9, 20), datetime(2025, 1, 6, 17, 0))
    verdict = classify(inp)
    print(verdict.attendance_code.value, verdict.display_status.value, verdict.late_minutes)


if __name__ == "__main__":
    main()
