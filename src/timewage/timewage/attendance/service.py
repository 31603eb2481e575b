from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.exceptions import AttendanceStateError, EmployeeNotFound
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..shifts.repository import ShiftRepository
from ..shifts.resolver import ShiftWindows, resolve_shift_windows
from .calculator.base import WorkHourCalculator
from .calculator.standard_calculator import StandardWorkHourCalculator
from .model import AttendanceEvent
from .repository import AttendanceRepository
from .validator import AttendanceTimeValidator

logger = logging.getLogger(__name__)


class AttendanceService:
    """Check-in / check-out actions: validate, persist, compute the day's hours."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        shifts: ShiftRepository,
        *,
        calculator: Optional[WorkHourCalculator] = None,
        validator: Optional[AttendanceTimeValidator] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._shifts = shifts
        self._calculator = calculator or StandardWorkHourCalculator()
        self._validator = validator or AttendanceTimeValidator()

    def _get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_employee(employee_id)
        if not employee:
            raise EmployeeNotFound(employee_id)
        return employee

    def _windows_for(self, employee: Employee, work_date: date) -> ShiftWindows:
        shift = self._shifts.get_by_id(employee.shift_id) if employee.shift_id is not None else None
        if not shift:
            raise AttendanceStateError(f"Employee {employee.employee_id} has no shift assigned")
        return resolve_shift_windows(shift, work_date)

    def _work_date_for_check_in(self, employee: Employee, now: datetime) -> tuple[date, ShiftWindows]:
        """The shift day ``now`` belongs to.

        Before the end of the previous day's overnight shift, a check-in is a
        late arrival for that shift rather than an early one for tonight's.
        """
        today = now.date()
        yesterday = today - timedelta(days=1)
        previous = self._windows_for(employee, yesterday)
        if previous.main_work.crosses_midnight and now < previous.main_work.end:
            return yesterday, previous
        return today, self._windows_for(employee, today)

    def check_in(self, employee_id: int, *, now: Optional[datetime] = None) -> AttendanceEvent:
        now = now or datetime.now()

        employee = self._get_employee(employee_id)
        work_date, windows = self._work_date_for_check_in(employee, now)
        if self._attendance.get_for_employee_and_date(employee_id, work_date):
            raise AttendanceStateError("Already checked in today")

        self._validator.validate_check_in(windows, now).raise_if_rejected()

        event = self._attendance.create_checkin(employee_id=employee_id, work_date=work_date, check_in_time=now)
        logger.info(
            "check-in recorded",
            extra={"employee_id": employee_id, "work_date": work_date.isoformat(), "check_in": now.isoformat()},
        )
        return event

    def _open_event(self, employee_id: int, now: datetime) -> Optional[AttendanceEvent]:
        event = self._attendance.get_for_employee_and_date(employee_id, now.date())
        if event:
            return event
        # Overnight shift checked in yesterday, checking out after midnight.
        previous = self._attendance.get_for_employee_and_date(employee_id, now.date() - timedelta(days=1))
        if previous and not previous.is_completed:
            return previous
        return None

    def check_out(self, employee_id: int, *, now: Optional[datetime] = None, work_date: Optional[date] = None) -> AttendanceEvent:
        """Complete the open event. Without ``work_date`` this is today's event,
        or yesterday's if it is still open (an overnight shift)."""
        now = now or datetime.now()

        employee = self._get_employee(employee_id)
        if work_date is None:
            event = self._open_event(employee_id, now)
        else:
            event = self._attendance.get_for_employee_and_date(employee_id, work_date)
        if not event:
            raise AttendanceStateError("No check-in recorded for this day")
        if event.is_completed:
            raise AttendanceStateError("Already checked out")

        windows = self._windows_for(employee, event.work_date)
        self._validator.validate_check_out(windows, event.check_in_time, now).raise_if_rejected()

        hours = self._calculator.calculate(windows, event.check_in_time, now)
        updated = self._attendance.update_attendance(
            event.attendance_id,
            check_out_time=now,
            main_work_hours=hours.main_work_hours,
            regular_overtime_hours=hours.regular_overtime_hours,
        )
        logger.info(
            "check-out recorded",
            extra={
                "employee_id": employee_id,
                "main_work_hours": hours.main_work_hours,
                "regular_overtime_hours": hours.regular_overtime_hours,
            },
        )
        return updated
