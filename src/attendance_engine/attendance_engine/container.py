from __future__ import annotations

from dataclasses import dataclass

from .attendance.classifier import AttendanceClassifier
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .calendar.mysql_calendar_repository import MySQLWorkCalendarRepository
from .calendar.service import WorkCalendarService
from .database.connection import DBConfig, DatabaseConnection
from .employees.department_repository import DepartmentRepository
from .employees.mysql_department_repository import MySQLDepartmentRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .reports.service import ReportService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    departments_repo: DepartmentRepository
    schedules_repo: ScheduleRepository
    attendance_repo: AttendanceRepository

    schedule_service: ScheduleService
    calendar_service: WorkCalendarService
    attendance_service: AttendanceService
    report_service: ReportService


def wire(
    *,
    employees_repo: EmployeeRepository,
    departments_repo: DepartmentRepository,
    schedules_repo: ScheduleRepository,
    attendance_repo: AttendanceRepository,
    calendar_service: WorkCalendarService,
) -> Container:
    """Build the service graph over any set of repositories."""

    schedule_service = ScheduleService(schedules_repo, employees_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        schedule_service,
        calendar_service,
        classifier=AttendanceClassifier(AttendanceStrategyFactory()),
    )
    report_service = ReportService(attendance_repo, employees_repo, schedule_service, calendar_service)

    return Container(
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        schedule_service=schedule_service,
        calendar_service=calendar_service,
        attendance_service=attendance_service,
        report_service=report_service,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        employees_repo=MySQLEmployeeRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        calendar_service=WorkCalendarService(MySQLWorkCalendarRepository(conn)),
    )
