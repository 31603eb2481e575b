from __future__ import annotations

import math
from datetime import datetime, timedelta

from ...common.datetime_utils import overlap_seconds, round_hours
from ...core.constants import DEFAULT_LATE_ROUNDING_MINUTES
from ...shifts.resolver import ShiftWindows
from ..model import WorkHours
from .base import WorkHourCalculator

SECONDS_PER_HOUR = 3600


class StandardWorkHourCalculator(WorkHourCalculator):
    """Standard rule.

    - Early arrival counts from the shift start.
    - Late arrival is rounded up to the next ``rounding_minutes`` boundary
      after the shift start (a 1 minute delay costs a full increment).
    - Departure is not rounded.
    - Main hours stop at the shift end and exclude the lunch overlap.
    - Regular overtime is the overlap with the overtime window.
    """

    def __init__(self, *, rounding_minutes: int = DEFAULT_LATE_ROUNDING_MINUTES):
        if rounding_minutes <= 0:
            raise ValueError("rounding_minutes must be positive")
        self._increment = timedelta(minutes=rounding_minutes)

    def effective_check_in(self, windows: ShiftWindows, check_in: datetime) -> datetime:
        start = windows.main_work.start
        if check_in <= start:
            return start
        increments = math.ceil((check_in - start) / self._increment)
        return start + increments * self._increment

    def calculate(self, windows: ShiftWindows, check_in: datetime, check_out: datetime) -> WorkHours:
        eff_in = self.effective_check_in(windows, check_in)
        eff_out = max(check_out, eff_in)

        main_end = min(eff_out, windows.main_work.end)
        main_seconds = max((main_end - eff_in).total_seconds(), 0.0)
        if windows.lunch_break is not None and main_end > eff_in:
            main_seconds -= overlap_seconds(eff_in, main_end, windows.lunch_break.start, windows.lunch_break.end)

        overtime_seconds = 0.0
        overtime = windows.regular_overtime
        if overtime is not None and eff_out > overtime.start:
            overtime_seconds = overlap_seconds(eff_in, eff_out, overtime.start, overtime.end)

        return WorkHours(
            main_work_hours=round_hours(max(main_seconds, 0.0) / SECONDS_PER_HOUR),
            regular_overtime_hours=round_hours(overtime_seconds / SECONDS_PER_HOUR),
        )
