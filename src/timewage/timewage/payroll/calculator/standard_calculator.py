from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Sequence

from ...common.datetime_utils import round_money
from ..model import AllowanceEntitlement, HourTotals, PayRateConfig, WageBreakdown
from .base import WageCalculator


def _amount(hours: float, rate: int) -> int:
    return round_money(Decimal(str(hours)) * rate)


class StandardWageCalculator(WageCalculator):
    """Standard rule: each hour bucket x its rate, rounded; flat allowances added."""

    def calculate(
        self,
        *,
        employee_id: int,
        period_start: date,
        period_end: date,
        hours: HourTotals,
        rate: PayRateConfig,
        allowances: Sequence[AllowanceEntitlement],
    ) -> WageBreakdown:
        return WageBreakdown(
            employee_id=employee_id,
            period_start=period_start,
            period_end=period_end,
            hours=hours,
            base_salary=_amount(hours.main_work_hours, rate.main_work_hour_rate),
            overtime_salary=_amount(hours.regular_overtime_hours, rate.regular_overtime_rate),
            weekly_overtime_salary=_amount(hours.weekly_overtime_hours, rate.weekly_overtime_rate),
            total_allowances=sum(int(a.amount) for a in allowances),
            allowances=tuple(allowances),
        )
