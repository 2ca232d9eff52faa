from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkSchedule


class ScheduleRepository(Protocol):
    def get_by_id(self, schedule_id: int) -> Optional[WorkSchedule]:
        raise NotImplementedError

    def list_all(self) -> Sequence[WorkSchedule]:
        raise NotImplementedError

    def list_for_department(self, department_id: int) -> Sequence[WorkSchedule]:
        """Department-wide schedules, lowest id first."""

        raise NotImplementedError

    def create(self, schedule: WorkSchedule) -> int:
        """Insert a schedule (its schedule_id is ignored).

        Returns schedule_id.
        """

        raise NotImplementedError

    def update(self, schedule: WorkSchedule) -> bool:
        raise NotImplementedError

    def delete(self, *, schedule_id: int) -> bool:
        raise NotImplementedError

    def set_department(self, *, schedule_id: int, department_id: Optional[int]) -> bool:
        raise NotImplementedError
