from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..core.constants import DAYS_PER_WEEK


@dataclass(frozen=True)
class WeeklySummary:
    employee_id: int
    week_start: date
    total_hours: float
    ceiling_hours: float
    weekly_overtime_hours: float
    carrier_attendance_id: Optional[int] = None

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=DAYS_PER_WEEK - 1)
