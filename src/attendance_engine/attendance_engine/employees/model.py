from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import DEFAULT_TOTAL_WORK_HOURS


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object (no DB access code). ``is_flexible_hours`` makes the
    employee judged on total hours only, whatever the schedule says.
    """

    employee_id: int
    full_name: str
    employee_code: str
    department_id: int
    work_schedule_id: Optional[int] = None
    is_flexible_hours: bool = False
    required_work_hours_per_day: float = DEFAULT_TOTAL_WORK_HOURS
    hire_date: Optional[date] = None
    is_active: bool = True
