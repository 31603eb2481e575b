from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Protocol, Sequence

from .model import AttendanceEvent


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceEvent]:
        raise NotImplementedError

    def create_checkin(self, *, employee_id: int, work_date: date, check_in_time: datetime) -> AttendanceEvent:
        raise NotImplementedError

    def find_attendance_in_range(self, employee_id: int, start: date, end: date) -> Sequence[AttendanceEvent]:
        """Events whose work_date falls in [start, end], ordered by work_date."""

        raise NotImplementedError

    def update_attendance(self, attendance_id: int, **fields: Any) -> AttendanceEvent:
        """Overwrite the given columns (check_out_time and the hour fields)."""

        raise NotImplementedError
