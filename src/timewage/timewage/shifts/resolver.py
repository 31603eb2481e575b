"""Shift Window Resolver.

Turns a shift's time-of-day markers into absolute instants for one calendar
day. Both the work-hour calculator and the attendance-time validator read
windows from here, so midnight handling lives in exactly one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.datetime_utils import midnight, overlap_seconds
from .model import ShiftDefinition

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class ShiftWindow:
    start: datetime
    end: datetime

    @property
    def hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600

    @property
    def crosses_midnight(self) -> bool:
        return self.end.date() > self.start.date()

    def overlap(self, start: datetime, end: datetime) -> timedelta:
        return timedelta(seconds=overlap_seconds(self.start, self.end, start, end))


@dataclass(frozen=True)
class ShiftWindows:
    """All windows of one shift day.

    ``weekly_overtime`` is informational: weekly overtime is a weekly total
    over the ceiling, not time worked inside this window.
    """

    reference_day: date
    main_work: ShiftWindow
    lunch_break: Optional[ShiftWindow] = None
    regular_overtime: Optional[ShiftWindow] = None
    weekly_overtime: Optional[ShiftWindow] = None


def resolve_window(anchor: datetime, start_marker: time, end_marker: time) -> ShiftWindow:
    start = datetime.combine(anchor.date(), start_marker)
    end = datetime.combine(anchor.date(), end_marker)
    if end <= start:
        end += ONE_DAY
    return ShiftWindow(start=start, end=end)


def _resolve_secondary(
    main: ShiftWindow,
    day_start: datetime,
    start_marker: Optional[time],
    end_marker: Optional[time],
) -> Optional[ShiftWindow]:
    if start_marker is None or end_marker is None:
        return None
    window = resolve_window(day_start, start_marker, end_marker)
    # After-midnight part of an overnight shift belongs to the next day.
    if main.crosses_midnight and window.start < main.start:
        window = ShiftWindow(start=window.start + ONE_DAY, end=window.end + ONE_DAY)
    return window


def resolve_shift_windows(shift: ShiftDefinition, reference_day: date) -> ShiftWindows:
    day_start = midnight(reference_day)
    main = resolve_window(day_start, shift.main_work_start, shift.main_work_end)
    return ShiftWindows(
        reference_day=reference_day,
        main_work=main,
        lunch_break=_resolve_secondary(main, day_start, shift.lunch_break_start, shift.lunch_break_end),
        regular_overtime=_resolve_secondary(main, day_start, shift.overtime_start, shift.overtime_end),
        weekly_overtime=_resolve_secondary(main, day_start, shift.weekly_overtime_start, shift.weekly_overtime_end),
    )
