from __future__ import annotations

from datetime import date
from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationRejected(DomainError):
    """Raised when a check-in/check-out time violates the attendance window policy."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ConfigurationMissing(DomainError):
    """Raised when no pay rate exists for a (contract category, department) pair."""

    def __init__(self, contract_category: Any, department_id: Any):
        category = getattr(contract_category, "value", contract_category)
        super().__init__(f"No pay rate configured for contract category {category} in department {department_id}")
        self.contract_category = contract_category
        self.department_id = department_id


class EmployeeNotFound(DomainError):
    def __init__(self, employee_id: Any):
        super().__init__(f"Employee {employee_id} not found")
        self.employee_id = employee_id


class AttendanceStateError(DomainError):
    """Raised when a check-in/check-out does not fit the day's attendance state."""


class AlreadyGenerated(Exception):
    """Signal (not a failure): a wage record already exists for the employee and period."""

    def __init__(self, employee_id: Any, period_start: date, period_end: date, existing: Optional[Any] = None):
        super().__init__(f"Wage for employee {employee_id} period {period_start}..{period_end} already exists")
        self.employee_id = employee_id
        self.period_start = period_start
        self.period_end = period_end
        self.existing = existing
