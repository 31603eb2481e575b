"""Example: the pure calculators, without a database.

Shift 08:00-16:00 with a 12:00-13:00 lunch; a check-in at 08:07 is paid from
08:15.
"""

from datetime import date, datetime, time

from src.timewage.timewage.attendance.calculator.standard_calculator import StandardWorkHourCalculator
from src.timewage.timewage.attendance.validator import AttendanceTimeValidator
from src.timewage.timewage.shifts.model import ShiftDefinition
from src.timewage.timewage.shifts.resolver import resolve_shift_windows


def main():
    shift = ShiftDefinition(
        shift_id=1,
        shift_name="Office",
        main_work_start=time(8, 0),
        main_work_end=time(16, 0),
        lunch_break_start=time(12, 0),
        lunch_break_end=time(13, 0),
    )
    windows = resolve_shift_windows(shift, date(2025, 3, 10))
    check_in, check_out = datetime(2025, 3, 10, 8, 7), datetime(2025, 3, 10, 16, 0)

    validator = AttendanceTimeValidator()
    print(validator.validate_check_in(windows, check_in))
    print(validator.validate_check_out(windows, check_in, check_out))
    print(StandardWorkHourCalculator().calculate(windows, check_in, check_out))


if __name__ == "__main__":
    main()
