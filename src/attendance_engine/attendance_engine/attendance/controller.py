from __future__ import annotations

from typing import Optional

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..common.responses import domain_error, fail, ok, system_error
from ..core.constants import DEFAULT_FLEX_ALLOWANCE_MINUTES, DEFAULT_HISTORY_LIMIT
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .classifier import classify
from .model import AttendanceRecord, AttendanceVerdict, ClassificationInput


def _minutes(value: Optional[float]) -> Optional[float]:
    return round(value, 2) if value is not None else None


def verdict_to_dict(verdict: AttendanceVerdict) -> dict:
    duration = verdict.work_duration
    return {
        "attendance_code": verdict.attendance_code.value,
        "display_status": verdict.display_status.value,
        "is_complete": verdict.is_complete,
        "is_late_arrival": verdict.is_late_arrival,
        "is_early_departure": verdict.is_early_departure,
        "is_overtime": verdict.is_overtime,
        "is_early_arrival": verdict.is_early_arrival,
        "late_minutes": _minutes(verdict.late_minutes),
        "early_departure_minutes": _minutes(verdict.early_departure_minutes),
        "overtime_minutes": _minutes(verdict.overtime_minutes),
        "early_arrival_minutes": _minutes(verdict.early_arrival_minutes),
        "work_duration_minutes": _minutes(duration.total_seconds() / 60) if duration is not None else None,
        "is_flexible_schedule": verdict.is_flexible_schedule,
        "expected_work_hours": verdict.expected_work_hours,
    }


def record_to_dict(record: AttendanceRecord) -> dict:
    out = {
        "attendance_id": record.attendance_id,
        "employee_id": record.employee_id,
        "work_date": record.work_date.isoformat(),
        "check_in_time": record.check_in_time.isoformat() if record.check_in_time else None,
        "check_out_time": record.check_out_time.isoformat() if record.check_out_time else None,
        "notes": record.notes,
    }
    out.update(verdict_to_dict(record.verdict))
    return out


def _opt_datetime(data: dict, key: str):
    value = data.get(key)
    if not value:
        return None
    try:
        parsed = parse_iso_datetime(str(value))
    except ValueError as e:
        raise ValidationError(f"{key} must be an ISO-8601 timestamp") from e
    if parsed.tzinfo is not None:
        raise ValidationError(f"{key} must be a local timestamp without UTC offset")
    return parsed


def input_from_dict(data: dict) -> ClassificationInput:
    try:
        return ClassificationInput(
            check_in_time=_opt_datetime(data, "check_in_time"),
            check_out_time=_opt_datetime(data, "check_out_time"),
            expected_work_hours=float(data.get("expected_work_hours") or 0),
            is_flexible_schedule=bool(data.get("is_flexible_schedule")),
            schedule_start=_opt_datetime(data, "schedule_start"),
            schedule_end=_opt_datetime(data, "schedule_end"),
            flex_allowance_minutes=int(data.get("flex_allowance_minutes", DEFAULT_FLEX_ALLOWANCE_MINUTES)),
            is_short_day=bool(data.get("is_short_day")),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid classification payload: {e}") from e


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/classify", methods=["POST"], endpoint="api_attendance_classify")
    def api_attendance_classify():
        try:
            verdict = classify(input_from_dict(request.get_json(silent=True) or {}))
            return ok(verdict_to_dict(verdict))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("classifying attendance")

    @app.route(
        "/api/employees/<int:employee_id>/attendance/<work_date>",
        methods=["PUT"],
        endpoint="api_attendance_record_day",
    )
    def api_attendance_record_day(employee_id: int, work_date: str):
        data = request.get_json(silent=True) or {}
        try:
            day = parse_iso_date(work_date)
        except ValueError:
            return fail("work_date must be YYYY-MM-DD", 400)

        try:
            record = container.attendance_service.record_day(
                employee_id,
                day,
                check_in=_opt_datetime(data, "check_in_time"),
                check_out=_opt_datetime(data, "check_out_time"),
                notes=str(data.get("notes") or ""),
            )
            if record is None:
                return ok(None)
            return ok(record_to_dict(record))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("recording attendance")

    @app.route("/api/employees/<int:employee_id>/check-in", methods=["POST"], endpoint="api_check_in")
    def api_check_in(employee_id: int):
        try:
            record = container.attendance_service.check_in(employee_id)
            return ok(record_to_dict(record))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("checking in")

    @app.route("/api/employees/<int:employee_id>/check-out", methods=["POST"], endpoint="api_check_out")
    def api_check_out(employee_id: int):
        try:
            record = container.attendance_service.check_out(employee_id)
            return ok(record_to_dict(record))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("checking out")

    @app.route("/api/employees/<int:employee_id>/attendance", methods=["GET"], endpoint="api_attendance_history")
    def api_attendance_history(employee_id: int):
        limit = request.args.get("limit", type=int) or DEFAULT_HISTORY_LIMIT
        try:
            return ok(container.attendance_service.get_history_ui(employee_id, limit=limit))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("loading attendance history")

    @app.route("/api/employees/<int:employee_id>/statistics", methods=["GET"], endpoint="api_attendance_statistics")
    def api_attendance_statistics(employee_id: int):
        try:
            start = parse_iso_date(request.args.get("start", ""))
            end = parse_iso_date(request.args.get("end", ""))
        except ValueError:
            return fail("start and end must be YYYY-MM-DD", 400)

        try:
            stats = container.attendance_service.get_statistics(employee_id, start, end)
            return ok(
                {
                    "total_working_days": stats.total_working_days,
                    "days_present": stats.days_present,
                    "days_absent": stats.days_absent,
                    "late_arrivals": stats.late_arrivals,
                    "early_departures": stats.early_departures,
                }
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("computing statistics")
