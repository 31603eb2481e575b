from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class WorkHours:
    """Per-day result of the work-hour calculator, hours rounded to 2 decimals."""

    main_work_hours: float
    regular_overtime_hours: float


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one employee, one calendar day.

    Hour fields stay None until check-out (main/regular) or until the weekly
    pass runs (weekly).
    """

    attendance_id: int
    employee_id: int
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    main_work_hours: Optional[float] = None
    regular_overtime_hours: Optional[float] = None
    weekly_overtime_hours: Optional[float] = None

    @property
    def is_completed(self) -> bool:
        return self.check_out_time is not None

    @property
    def daily_hours(self) -> float:
        return float(self.main_work_hours or 0) + float(self.regular_overtime_hours or 0)
