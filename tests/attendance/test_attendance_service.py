from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.timewage.timewage.attendance.service import AttendanceService
from src.timewage.timewage.core.enums import ContractCategory
from src.timewage.timewage.core.exceptions import AttendanceStateError, EmployeeNotFound, ValidationRejected
from src.timewage.timewage.employees.model import Employee
from src.timewage.timewage.shifts.model import ShiftDefinition
from tests.fakes import InMemoryAttendance, InMemoryEmployees, InMemoryShifts

OFFICE = ShiftDefinition(
    shift_id=1,
    shift_name="Office",
    main_work_start=time(8, 0),
    main_work_end=time(16, 0),
    lunch_break_start=time(12, 0),
    lunch_break_end=time(13, 0),
    overtime_start=time(16, 0),
    overtime_end=time(19, 0),
)
NIGHT = ShiftDefinition(shift_id=2, shift_name="Night", main_work_start=time(22, 0), main_work_end=time(6, 0))


def _service(attendance: InMemoryAttendance) -> AttendanceService:
    employees = InMemoryEmployees(
        {
            1: Employee(employee_id=1, full_name="A", contract_category=ContractCategory.PERMANENT, department_id=10, shift_id=1),
            2: Employee(employee_id=2, full_name="B", contract_category=ContractCategory.PERMANENT, department_id=10, shift_id=2),
            3: Employee(employee_id=3, full_name="C", contract_category=ContractCategory.TRAINING, department_id=10),
        }
    )
    return AttendanceService(attendance, employees, InMemoryShifts({1: OFFICE, 2: NIGHT}))


def test_check_in_then_check_out_stores_computed_hours():
    attendance = InMemoryAttendance()
    svc = _service(attendance)

    svc.check_in(1, now=datetime(2025, 3, 10, 8, 7))
    event = svc.check_out(1, now=datetime(2025, 3, 10, 17, 0))

    assert event.check_out_time == datetime(2025, 3, 10, 17, 0)
    assert event.main_work_hours == 6.75
    assert event.regular_overtime_hours == 1.0
    assert event.weekly_overtime_hours is None
    assert attendance.get_for_employee_and_date(1, date(2025, 3, 10)) == event


def test_second_check_in_same_day_is_rejected():
    svc = _service(InMemoryAttendance())
    svc.check_in(1, now=datetime(2025, 3, 10, 8, 0))

    with pytest.raises(AttendanceStateError):
        svc.check_in(1, now=datetime(2025, 3, 10, 9, 0))


def test_unknown_employee():
    with pytest.raises(EmployeeNotFound):
        _service(InMemoryAttendance()).check_in(99, now=datetime(2025, 3, 10, 8, 0))


def test_employee_without_shift_cannot_check_in():
    with pytest.raises(AttendanceStateError):
        _service(InMemoryAttendance()).check_in(3, now=datetime(2025, 3, 10, 8, 0))


def test_too_early_check_in_is_rejected_and_not_stored():
    attendance = InMemoryAttendance()

    with pytest.raises(ValidationRejected):
        _service(attendance).check_in(1, now=datetime(2025, 3, 10, 4, 0))
    assert attendance.events == {}


def test_check_out_without_check_in():
    with pytest.raises(AttendanceStateError):
        _service(InMemoryAttendance()).check_out(1, now=datetime(2025, 3, 10, 16, 0))


def test_check_out_twice_is_rejected():
    svc = _service(InMemoryAttendance())
    svc.check_in(1, now=datetime(2025, 3, 10, 8, 0))
    svc.check_out(1, now=datetime(2025, 3, 10, 16, 0))

    with pytest.raises(AttendanceStateError):
        svc.check_out(1, now=datetime(2025, 3, 10, 16, 5))


def test_too_late_check_out_is_rejected_and_event_stays_open():
    attendance = InMemoryAttendance()
    svc = _service(attendance)
    svc.check_in(1, now=datetime(2025, 3, 10, 8, 0))

    with pytest.raises(ValidationRejected):
        svc.check_out(1, now=datetime(2025, 3, 10, 18, 30))
    assert not attendance.get_for_employee_and_date(1, date(2025, 3, 10)).is_completed


def test_overnight_check_out_after_midnight_uses_check_in_day():
    svc = _service(InMemoryAttendance())
    svc.check_in(2, now=datetime(2025, 3, 10, 21, 55))

    event = svc.check_out(2, now=datetime(2025, 3, 11, 6, 0), work_date=date(2025, 3, 10))

    assert event.work_date == date(2025, 3, 10)
    assert event.main_work_hours == 8.0


def test_overnight_check_out_finds_yesterdays_open_event():
    svc = _service(InMemoryAttendance())
    svc.check_in(2, now=datetime(2025, 3, 10, 22, 0))

    event = svc.check_out(2, now=datetime(2025, 3, 11, 5, 30))

    assert event.work_date == date(2025, 3, 10)
    assert event.main_work_hours == 7.5


def test_late_arrival_after_midnight_belongs_to_previous_nights_shift():
    attendance = InMemoryAttendance()
    svc = _service(attendance)

    checked_in = svc.check_in(2, now=datetime(2025, 3, 11, 0, 30))
    event = svc.check_out(2, now=datetime(2025, 3, 11, 6, 0))

    assert checked_in.work_date == date(2025, 3, 10)
    assert event.attendance_id == checked_in.attendance_id
    assert event.main_work_hours == 5.5


def test_second_check_in_during_overnight_shift_is_rejected():
    svc = _service(InMemoryAttendance())
    svc.check_in(2, now=datetime(2025, 3, 10, 21, 50))

    with pytest.raises(AttendanceStateError):
        svc.check_in(2, now=datetime(2025, 3, 11, 1, 0))


def test_day_shift_check_in_after_midnight_uses_today():
    attendance = InMemoryAttendance()

    with pytest.raises(ValidationRejected):
        _service(attendance).check_in(1, now=datetime(2025, 3, 11, 0, 30))
    assert attendance.events == {}
