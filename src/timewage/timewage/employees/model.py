from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ContractCategory


@dataclass(frozen=True)
class Employee:
    """Domain entity: the slice of an employee the engine reads."""

    employee_id: int
    full_name: str
    contract_category: ContractCategory
    department_id: int
    shift_id: Optional[int] = None
    contract_end_date: Optional[date] = None

    def is_eligible_for(self, period_start: date) -> bool:
        """Contract is open-ended or has not ended before the period starts."""
        return self.contract_end_date is None or self.contract_end_date >= period_start
