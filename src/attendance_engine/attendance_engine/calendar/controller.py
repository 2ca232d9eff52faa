from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import domain_error, fail, ok, system_error
from ..core.enums import CalendarEntryType
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/calendar", methods=["GET", "POST"], endpoint="api_calendar")
    def api_calendar():
        if request.method == "GET":
            try:
                start = parse_iso_date(request.args.get("start", ""))
                end = parse_iso_date(request.args.get("end", ""))
            except ValueError:
                return fail("start and end must be YYYY-MM-DD", 400)
            try:
                entries = container.calendar_service.list_range(start=start, end=end)
            except DomainError as e:
                return domain_error(e)
            return ok(
                [
                    {
                        "entry_id": e.entry_id,
                        "date": e.entry_date.isoformat(),
                        "name": e.name,
                        "entry_type": e.entry_type.value,
                        "is_recurring_annually": e.is_recurring_annually,
                        "description": e.description,
                    }
                    for e in entries
                ]
            )

        data = request.get_json(silent=True) or {}
        try:
            entry_date = parse_iso_date(str(data.get("date", "")))
            entry_type = CalendarEntryType(data.get("entry_type"))
        except ValueError:
            return fail("date (YYYY-MM-DD) and a valid entry_type are required", 400)

        try:
            entry_id = container.calendar_service.add_entry(
                entry_date=entry_date,
                name=str(data.get("name") or ""),
                entry_type=entry_type,
                is_recurring_annually=bool(data.get("is_recurring_annually")),
                description=str(data.get("description") or ""),
            )
            return ok({"entry_id": entry_id}, 201)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("adding calendar entry")

    @app.route("/api/calendar/<int:entry_id>", methods=["DELETE"], endpoint="api_calendar_delete")
    def api_calendar_delete(entry_id: int):
        try:
            container.calendar_service.delete_entry(entry_id=entry_id)
            return ok()
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("deleting calendar entry")
