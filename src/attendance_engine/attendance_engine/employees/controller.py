from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="api_employees")
    def api_employees():
        employees = container.employees_repo.list_active()
        return jsonify(
            [
                {
                    "employee_id": e.employee_id,
                    "full_name": e.full_name,
                    "employee_code": e.employee_code,
                    "department_id": e.department_id,
                    "work_schedule_id": e.work_schedule_id,
                    "is_flexible_hours": e.is_flexible_hours,
                    "required_work_hours_per_day": e.required_work_hours_per_day,
                }
                for e in employees
            ]
        )

    @app.route("/api/departments", methods=["GET"], endpoint="api_departments")
    def api_departments():
        return jsonify([{"department_id": d.department_id, "name": d.name} for d in container.departments_repo.list_all()])
