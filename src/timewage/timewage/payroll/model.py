from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import ContractCategory, PaymentStatus


@dataclass(frozen=True)
class PayRateConfig:
    """Hourly rates (whole currency units) for one (contract category, department)."""

    contract_category: ContractCategory
    department_id: int
    main_work_hour_rate: int
    regular_overtime_rate: int
    weekly_overtime_rate: int


@dataclass(frozen=True)
class AllowanceEntitlement:
    employee_id: int
    allowance_type: str
    amount: int


@dataclass(frozen=True)
class HourTotals:
    main_work_hours: float = 0.0
    regular_overtime_hours: float = 0.0
    weekly_overtime_hours: float = 0.0


@dataclass(frozen=True)
class WageBreakdown:
    """Unsaved wage computation for one employee and period."""

    employee_id: int
    period_start: date
    period_end: date
    hours: HourTotals
    base_salary: int
    overtime_salary: int
    weekly_overtime_salary: int
    total_allowances: int
    allowances: tuple[AllowanceEntitlement, ...] = ()

    @property
    def total_payable(self) -> int:
        return self.base_salary + self.overtime_salary + self.weekly_overtime_salary + self.total_allowances


@dataclass(frozen=True)
class WageRecord:
    """Persisted wage for one employee and pay period."""

    wage_id: int
    employee_id: int
    department_id: int
    period_start: date
    period_end: date
    main_work_hours: float
    regular_overtime_hours: float
    weekly_overtime_hours: float
    base_salary: int
    overtime_salary: int
    weekly_overtime_salary: int
    total_allowances: int
    total_payable: int
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    paid_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID


@dataclass(frozen=True)
class GenerationFailure:
    employee_id: int
    error: str


@dataclass
class BatchReport:
    period_start: date
    period_end: date
    created: list[WageRecord] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    failures: list[GenerationFailure] = field(default_factory=list)


@dataclass(frozen=True)
class DepartmentWageStats:
    count: int
    total_amount: int
    average: float


@dataclass(frozen=True)
class WageStatistics:
    total_records: int
    total_amount: int
    paid_count: int
    unpaid_count: int
    by_department: dict[int, DepartmentWageStats]
