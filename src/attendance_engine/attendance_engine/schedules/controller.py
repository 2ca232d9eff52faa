from __future__ import annotations

from datetime import datetime

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import domain_error, fail, ok, system_error
from ..core.constants import DEFAULT_FLEX_ALLOWANCE_MINUTES
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..container import Container
from .model import FixedHours, FlexibleHours, WorkingDays, WorkSchedule


def schedule_to_dict(schedule: WorkSchedule) -> dict:
    out = {
        "schedule_id": schedule.schedule_id,
        "name": schedule.name,
        "is_flexible": schedule.is_flexible,
        "working_days": schedule.working_days.to_mask(),
        "flex_allowance_minutes": schedule.flex_allowance_minutes,
        "department_id": schedule.department_id,
        "description": schedule.description,
    }
    if isinstance(schedule.mode, FixedHours):
        out["start_time"] = schedule.mode.start_time.strftime("%H:%M")
        out["end_time"] = schedule.mode.end_time.strftime("%H:%M")
    else:
        out["total_work_hours"] = schedule.mode.total_work_hours
    return out


def schedule_from_dict(data: dict, *, schedule_id: int = 0) -> WorkSchedule:
    try:
        if data.get("is_flexible"):
            mode = FlexibleHours(total_work_hours=float(data["total_work_hours"]))
        else:
            mode = FixedHours(
                start_time=datetime.strptime(data["start_time"], "%H:%M").time(),
                end_time=datetime.strptime(data["end_time"], "%H:%M").time(),
            )
        department_id = data.get("department_id")
        return WorkSchedule(
            schedule_id=schedule_id,
            name=str(data.get("name") or ""),
            mode=mode,
            working_days=WorkingDays.from_mask(str(data.get("working_days") or "1111100")),
            flex_allowance_minutes=int(data.get("flex_allowance_minutes", DEFAULT_FLEX_ALLOWANCE_MINUTES)),
            department_id=int(department_id) if department_id is not None else None,
            description=str(data.get("description") or ""),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid schedule payload: {e}") from e


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedules", methods=["GET", "POST"], endpoint="api_schedules")
    def api_schedules():
        if request.method == "GET":
            return ok([schedule_to_dict(s) for s in container.schedules_repo.list_all()])

        try:
            schedule_id = container.schedule_service.create(schedule_from_dict(request.get_json(silent=True) or {}))
            return ok({"schedule_id": schedule_id}, 201)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("creating schedule")

    @app.route("/api/schedules/<int:schedule_id>", methods=["PUT", "DELETE"], endpoint="api_schedule")
    def api_schedule(schedule_id: int):
        try:
            if request.method == "DELETE":
                container.schedule_service.delete(schedule_id=schedule_id)
            else:
                payload = request.get_json(silent=True) or {}
                container.schedule_service.update(schedule_from_dict(payload, schedule_id=schedule_id))
            return ok()
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("changing schedule")

    @app.route("/api/schedules/<int:schedule_id>/assign", methods=["POST"], endpoint="api_schedule_assign")
    def api_schedule_assign(schedule_id: int):
        data = request.get_json(silent=True) or {}
        try:
            if data.get("employee_id") is not None:
                container.schedule_service.assign_to_employee(schedule_id=schedule_id, employee_id=int(data["employee_id"]))
            elif data.get("department_id") is not None:
                container.schedule_service.assign_to_department(
                    schedule_id=schedule_id, department_id=int(data["department_id"])
                )
            else:
                return fail("employee_id or department_id is required", 400)
            return ok()
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("assigning schedule")

    @app.route("/api/employees/<int:employee_id>/expected-hours", methods=["GET"], endpoint="api_expected_hours")
    def api_expected_hours(employee_id: int):
        try:
            day = parse_iso_date(request.args.get("date", ""))
        except ValueError:
            return fail("date must be YYYY-MM-DD", 400)

        try:
            hours = container.attendance_service.expected_hours_for(employee_id, day)
            return ok({"employee_id": employee_id, "date": day.isoformat(), "expected_work_hours": hours})
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("evaluating schedule")

    @app.route(
        "/api/employees/<int:employee_id>/attendance-window",
        methods=["GET"],
        endpoint="api_attendance_window",
    )
    def api_attendance_window(employee_id: int):
        try:
            day = parse_iso_date(request.args.get("date", ""))
        except ValueError:
            return fail("date must be YYYY-MM-DD", 400)

        try:
            employee = container.employees_repo.get_by_id(employee_id)
            if not employee:
                raise NotFoundError(f"Employee {employee_id} not found")

            schedule = container.schedule_service.resolve_for_employee(employee)
            working = container.calendar_service.is_working_date(day, schedule)
            latest_in, earliest_out = (
                container.schedule_service.allowed_attendance_times(employee, day) if working else (None, None)
            )
            return ok(
                {
                    "employee_id": employee_id,
                    "date": day.isoformat(),
                    "is_working_day": working,
                    "latest_check_in": latest_in.isoformat() if latest_in else None,
                    "earliest_check_out": earliest_out.isoformat() if earliest_out else None,
                }
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("evaluating attendance window")
