from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Protocol, Sequence

from ..core.enums import ContractCategory
from .model import AllowanceEntitlement, PayRateConfig, WageBreakdown, WageRecord


class RateRepository(Protocol):
    def find_rate(self, contract_category: ContractCategory, department_id: int) -> Optional[PayRateConfig]:
        raise NotImplementedError


class AllowanceRepository(Protocol):
    def list_allowances(self, employee_id: int) -> Sequence[AllowanceEntitlement]:
        raise NotImplementedError


class WageRepository(Protocol):
    def find_existing_wage(self, employee_id: int, period_start: date, period_end: date) -> Optional[WageRecord]:
        raise NotImplementedError

    def create_wage(self, breakdown: WageBreakdown, *, department_id: int) -> WageRecord:
        """Insert an UNPAID record.

        Must raise ``AlreadyGenerated`` if a record for the same
        (employee, period) was created concurrently.
        """

        raise NotImplementedError

    def update_wage(self, wage_id: int, **fields: Any) -> WageRecord:
        raise NotImplementedError

    def list_unpaid_for_employee(self, employee_id: int) -> Sequence[WageRecord]:
        raise NotImplementedError

    def list_in_range(self, start: date, end: date) -> Sequence[WageRecord]:
        """Records whose period_start falls in [start, end]."""

        raise NotImplementedError

    def mark_paid(self, wage_ids: Sequence[int], *, paid_at: datetime) -> int:
        """Flip UNPAID records to PAID; returns how many changed."""

        raise NotImplementedError
