"""Attendance-Time Validator.

Pure policy check gating the check-in and check-out actions. It never mutates
state; callers decide whether to surface the reason or raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..core.constants import DEFAULT_EARLY_CHECK_IN_HOURS, DEFAULT_LATE_CHECK_OUT_HOURS
from ..core.exceptions import ValidationRejected
from ..shifts.resolver import ShiftWindows

_FMT = "%Y-%m-%d %H:%M"


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: Optional[str] = None

    def raise_if_rejected(self) -> None:
        if not self.ok:
            raise ValidationRejected(self.reason or "Attendance time rejected")


ACCEPTED = ValidationResult(ok=True)


class AttendanceTimeValidator:
    def __init__(
        self,
        *,
        early_check_in_hours: float = DEFAULT_EARLY_CHECK_IN_HOURS,
        late_check_out_hours: float = DEFAULT_LATE_CHECK_OUT_HOURS,
    ):
        self._early = timedelta(hours=early_check_in_hours)
        self._late = timedelta(hours=late_check_out_hours)

    def earliest_check_in(self, windows: ShiftWindows) -> datetime:
        return windows.main_work.start - self._early

    def latest_check_out(self, windows: ShiftWindows) -> datetime:
        return windows.main_work.end + self._late

    def validate_check_in(self, windows: ShiftWindows, check_in: datetime) -> ValidationResult:
        earliest = self.earliest_check_in(windows)
        if check_in < earliest:
            return ValidationResult(
                ok=False,
                reason=f"Check-in at {check_in:{_FMT}} is too early; earliest allowed is {earliest:{_FMT}}",
            )
        return ACCEPTED

    def validate_check_out(self, windows: ShiftWindows, check_in: datetime, check_out: datetime) -> ValidationResult:
        if check_out <= check_in:
            return ValidationResult(
                ok=False,
                reason=f"Check-out at {check_out:{_FMT}} must be after check-in at {check_in:{_FMT}}",
            )
        latest = self.latest_check_out(windows)
        if check_out > latest:
            return ValidationResult(
                ok=False,
                reason=f"Check-out at {check_out:{_FMT}} is too late; latest allowed is {latest:{_FMT}}",
            )
        return ACCEPTED
