from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta

from ..model import AttendanceVerdict, ClassificationInput


def to_minutes(delta: timedelta) -> float:
    return delta.total_seconds() / 60


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how one kind of day is classified."""

    @abstractmethod
    def classify(self, inp: ClassificationInput) -> AttendanceVerdict:
        raise NotImplementedError
