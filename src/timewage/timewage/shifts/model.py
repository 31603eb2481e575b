from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class ShiftDefinition:
    """Domain entity: a work pattern expressed as wall-clock markers.

    An end marker at or before its start marker means the window runs into the
    next calendar day.
    """

    shift_id: int
    shift_name: str
    main_work_start: time
    main_work_end: time
    lunch_break_start: Optional[time] = None
    lunch_break_end: Optional[time] = None
    overtime_start: Optional[time] = None
    overtime_end: Optional[time] = None
    weekly_overtime_start: Optional[time] = None
    weekly_overtime_end: Optional[time] = None
