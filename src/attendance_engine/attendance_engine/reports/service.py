from __future__ import annotations

import io
from collections import Counter
from dataclasses import dataclass
from datetime import date

import pandas as pd

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..calendar.service import CalendarProvider
from ..common.datetime_utils import format_hhmm, iter_dates
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..schedules.evaluator import is_working_day
from ..schedules.service import ScheduleService

REPORT_COLUMNS = [
    "work_date",
    "employee_id",
    "full_name",
    "check_in",
    "check_out",
    "worked_hours",
    "code",
    "status",
    "expected_hours",
    "notes",
]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


class ReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        schedules: ScheduleService,
        calendar: CalendarProvider,
    ):
        self._attendance = attendance
        self._employees = employees
        self._schedules = schedules
        self._calendar = calendar

    def build_attendance_report(self, *, employee_id: int, start: date, end: date) -> ReportData:
        if end < start:
            raise ValidationError("End date must not be before start date")

        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")

        schedule = self._schedules.resolve_for_employee(employee)
        records = {
            r.work_date: r
            for r in self._attendance.list_range(employee_id=employee.employee_id, start_date=start, end_date=end)
        }

        rows: list[dict] = []
        codes: Counter = Counter()
        total_minutes = 0

        for day in iter_dates(start, end):
            if employee.hire_date and day < employee.hire_date:
                continue

            base = {"work_date": day.strftime("%Y-%m-%d"), "employee_id": employee.employee_id, "full_name": employee.full_name}
            record = records.get(day)
            if record is not None:
                row = self._record_row(record)
                total_minutes += row.pop("_minutes")
                codes[row["code"]] += 1
            else:
                row = {
                    "check_in": "-",
                    "check_out": "-",
                    "worked_hours": "00:00",
                    "code": "",
                    "status": self._missing_status(day, schedule),
                    "expected_hours": "",
                    "notes": "",
                }
                if row["status"] == "Absent":
                    codes["A"] += 1
            rows.append({**base, **row})

        summary = {
            "employee_id": employee.employee_id,
            "full_name": employee.full_name,
            "total_hours": format_hhmm(total_minutes),
            "codes": dict(sorted(codes.items())),
        }
        return ReportData(rows=rows, summary=summary)

    def _missing_status(self, day: date, schedule) -> str:
        if self._calendar.is_holiday(day):
            return "Holiday"
        if not is_working_day(schedule, day.weekday()):
            return "Non-Working Day"
        return "Absent"

    @staticmethod
    def _record_row(r: AttendanceRecord) -> dict:
        duration = r.verdict.work_duration
        minutes = int(duration.total_seconds() // 60) if duration is not None else 0
        return {
            "check_in": r.check_in_time.strftime("%H:%M") if r.check_in_time else "-",
            "check_out": r.check_out_time.strftime("%H:%M") if r.check_out_time else "-",
            "worked_hours": format_hhmm(minutes),
            "code": r.verdict.attendance_code.value,
            "status": r.verdict.display_status.value,
            "expected_hours": f"{r.verdict.expected_work_hours:.2f}",
            "notes": r.notes,
            "_minutes": minutes,
        }


def export_report(report: ReportData, fmt: str = "csv") -> bytes:
    """Serialize report rows as CSV or XLSX."""

    df = pd.DataFrame(report.rows, columns=REPORT_COLUMNS)
    fmt = (fmt or "csv").lower()

    if fmt == "csv":
        return df.to_csv(index=False).encode("utf-8-sig")

    if fmt == "xlsx":
        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Attendance")
        return out.getvalue()

    raise ValidationError(f"Unsupported export format: {fmt}")
