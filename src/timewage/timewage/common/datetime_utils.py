from __future__ import annotations

from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

_HOUR_QUANTUM = Decimal("0.01")
_MONEY_QUANTUM = Decimal("1")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def midnight(day: date) -> datetime:
    return datetime.combine(day, time.min)


def overlap_seconds(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> float:
    """Length of the intersection of [a_start, a_end] and [b_start, b_end], 0 if disjoint."""
    start = max(a_start, b_start)
    end = min(a_end, b_end)
    if end <= start:
        return 0.0
    return (end - start).total_seconds()


def round_hours(value: Union[float, Decimal]) -> float:
    """Round half-up to 2 decimals, floored at 0."""
    quantized = Decimal(str(value)).quantize(_HOUR_QUANTUM, rounding=ROUND_HALF_UP)
    return max(float(quantized), 0.0)


def round_money(value: Union[float, Decimal]) -> int:
    """Round half-up to whole currency units."""
    return int(Decimal(str(value)).quantize(_MONEY_QUANTUM, rounding=ROUND_HALF_UP))
