"""Weekly Overtime Reconciler.

A separate pass from the per-day calculation: a single day's check-out cannot
know the week's total, so weekly overtime is computed over a closed 7-day
window and written back afterwards.

Weeks are calendar weeks starting on a fixed weekday, never on the first day
of a pay period. A week belongs to the pay period that contains its last day,
so two consecutive periods always see the same week boundaries.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, Optional

from ..attendance.model import AttendanceEvent
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import round_hours
from ..core.constants import DAYS_PER_WEEK, DEFAULT_WEEK_START_WEEKDAY, DEFAULT_WEEKLY_NORMAL_HOURS
from .model import WeeklySummary

logger = logging.getLogger(__name__)


def calculate_weekly_overtime(events: Iterable[AttendanceEvent], ceiling_hours: float = DEFAULT_WEEKLY_NORMAL_HOURS) -> float:
    """max(0, sum of main + regular overtime hours - ceiling), 2 decimals."""
    total = sum(e.daily_hours for e in events)
    return round_hours(max(0.0, total - ceiling_hours))


class WeeklyOvertimeReconciler:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        ceiling_hours: float = DEFAULT_WEEKLY_NORMAL_HOURS,
        week_start_weekday: int = DEFAULT_WEEK_START_WEEKDAY,
    ):
        if ceiling_hours < 0:
            raise ValueError("ceiling_hours must not be negative")
        if not 0 <= week_start_weekday < DAYS_PER_WEEK:
            raise ValueError("week_start_weekday must be between 0 (Monday) and 6 (Sunday)")
        self._attendance = attendance
        self._ceiling = float(ceiling_hours)
        self._week_start_weekday = week_start_weekday

    def week_containing(self, day: date) -> date:
        """First day of the calendar week that contains ``day``."""
        return day - timedelta(days=(day.weekday() - self._week_start_weekday) % DAYS_PER_WEEK)

    def reconcile_week(self, employee_id: int, week_start: date) -> WeeklySummary:
        """Compute and store weekly overtime for [week_start, week_start + 6 days].

        The whole figure goes on the last completed event of the week and every
        other event is reset to 0, so re-runs overwrite and period sums count
        each week once.
        """
        week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)
        events = sorted(
            self._attendance.find_attendance_in_range(employee_id, week_start, week_end),
            key=lambda e: (e.work_date, e.check_in_time),
        )

        total = round_hours(sum(e.daily_hours for e in events))
        weekly_overtime = calculate_weekly_overtime(events, self._ceiling)

        completed = [e for e in events if e.is_completed]
        carrier: Optional[AttendanceEvent] = completed[-1] if completed else None

        for event in events:
            value = weekly_overtime if carrier and event.attendance_id == carrier.attendance_id else 0.0
            if event.weekly_overtime_hours != value:
                self._attendance.update_attendance(event.attendance_id, weekly_overtime_hours=value)

        logger.info(
            "weekly overtime reconciled",
            extra={
                "employee_id": employee_id,
                "week_start": week_start.isoformat(),
                "total_hours": total,
                "weekly_overtime_hours": weekly_overtime,
            },
        )
        return WeeklySummary(
            employee_id=employee_id,
            week_start=week_start,
            total_hours=total,
            ceiling_hours=self._ceiling,
            weekly_overtime_hours=weekly_overtime,
            carrier_attendance_id=carrier.attendance_id if carrier else None,
        )

    def reconcile_period(self, employee_id: int, start: date, end: date) -> list[WeeklySummary]:
        """Reconcile every calendar week whose last day falls in [start, end].

        A week that began in the previous period is recomputed in full here;
        a week that runs past ``end`` is left for the next period.
        """
        if end < start:
            raise ValueError("end must not be before start")
        summaries = []
        week_start = self.week_containing(start)
        while week_start + timedelta(days=DAYS_PER_WEEK - 1) <= end:
            summaries.append(self.reconcile_week(employee_id, week_start))
            week_start += timedelta(days=DAYS_PER_WEEK)
        return summaries
