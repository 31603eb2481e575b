from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...shifts.resolver import ShiftWindows
from ..model import WorkHours


class WorkHourCalculator(ABC):
    """Calculator interface (Strategy Pattern for daily work hours)."""

    @abstractmethod
    def calculate(self, windows: ShiftWindows, check_in: datetime, check_out: datetime) -> WorkHours:
        raise NotImplementedError
