from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Sequence

from ..model import AllowanceEntitlement, HourTotals, PayRateConfig, WageBreakdown


class WageCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
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
        raise NotImplementedError
