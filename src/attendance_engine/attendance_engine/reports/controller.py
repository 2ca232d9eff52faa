from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import domain_error, fail, ok, system_error
from ..core.exceptions import DomainError
from ..container import Container
from .service import export_report

_MIMETYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<int:employee_id>/report", methods=["GET"], endpoint="api_attendance_report")
    def api_attendance_report(employee_id: int):
        try:
            start = parse_iso_date(request.args.get("start", ""))
            end = parse_iso_date(request.args.get("end", ""))
        except ValueError:
            return fail("start and end must be YYYY-MM-DD", 400)

        fmt = (request.args.get("format") or "json").lower()
        if fmt not in ("json", *_MIMETYPES):
            return fail(f"Unsupported format: {fmt}", 400)

        try:
            report = container.report_service.build_attendance_report(employee_id=employee_id, start=start, end=end)
            if fmt == "json":
                return ok({"rows": report.rows, "summary": report.summary})

            filename = f"attendance_{employee_id}_{start:%Y%m%d}_{end:%Y%m%d}.{fmt}"
            return app.response_class(
                export_report(report, fmt),
                mimetype=_MIMETYPES[fmt],
                headers={"Content-Disposition": f"attachment; filename={filename}"},
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            return system_error("building report")
