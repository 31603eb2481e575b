from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import round_hours
from ..core.enums import ContractCategory
from ..core.exceptions import AlreadyGenerated, ConfigurationMissing, EmployeeNotFound
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import WageCalculator
from .calculator.standard_calculator import StandardWageCalculator
from .model import (
    BatchReport,
    DepartmentWageStats,
    GenerationFailure,
    HourTotals,
    WageBreakdown,
    WageRecord,
    WageStatistics,
)
from .repository import AllowanceRepository, RateRepository, WageRepository

logger = logging.getLogger(__name__)


def _wage_fields(breakdown: WageBreakdown) -> dict:
    return {
        "main_work_hours": breakdown.hours.main_work_hours,
        "regular_overtime_hours": breakdown.hours.regular_overtime_hours,
        "weekly_overtime_hours": breakdown.hours.weekly_overtime_hours,
        "base_salary": breakdown.base_salary,
        "overtime_salary": breakdown.overtime_salary,
        "weekly_overtime_salary": breakdown.weekly_overtime_salary,
        "total_allowances": breakdown.total_allowances,
        "total_payable": breakdown.total_payable,
    }


class WageService:
    """Wage aggregation for pay periods.

    Folds the stored per-day hours, the pay rate of the employee's
    (contract category, department) and flat allowances into a wage record.
    Generation is idempotent per (employee, period).
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        rates: RateRepository,
        allowances: AllowanceRepository,
        wages: WageRepository,
        *,
        calculator: Optional[WageCalculator] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._rates = rates
        self._allowances = allowances
        self._wages = wages
        self._calculator = calculator or StandardWageCalculator()

    def _get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_employee(employee_id)
        if not employee:
            raise EmployeeNotFound(employee_id)
        return employee

    def _hour_totals(self, employee_id: int, start: date, end: date) -> HourTotals:
        events = self._attendance.find_attendance_in_range(employee_id, start, end)
        return HourTotals(
            main_work_hours=round_hours(sum(float(e.main_work_hours or 0) for e in events)),
            regular_overtime_hours=round_hours(sum(float(e.regular_overtime_hours or 0) for e in events)),
            weekly_overtime_hours=round_hours(sum(float(e.weekly_overtime_hours or 0) for e in events)),
        )

    def _calculate(
        self,
        employee: Employee,
        start: date,
        end: date,
        *,
        contract_category: Optional[ContractCategory] = None,
    ) -> WageBreakdown:
        category = contract_category or employee.contract_category
        hours = self._hour_totals(employee.employee_id, start, end)

        rate = self._rates.find_rate(category, employee.department_id)
        if rate is None:
            raise ConfigurationMissing(category, employee.department_id)

        return self._calculator.calculate(
            employee_id=employee.employee_id,
            period_start=start,
            period_end=end,
            hours=hours,
            rate=rate,
            allowances=list(self._allowances.list_allowances(employee.employee_id)),
        )

    def calculate_wage(self, employee_id: int, start: date, end: date) -> WageBreakdown:
        if end < start:
            raise ValueError("Period end must not be before period start")
        return self._calculate(self._get_employee(employee_id), start, end)

    def _generate(self, employee: Employee, start: date, end: date) -> WageRecord:
        existing = self._wages.find_existing_wage(employee.employee_id, start, end)
        if existing:
            raise AlreadyGenerated(employee.employee_id, start, end, existing)

        breakdown = self._calculate(employee, start, end)
        return self._wages.create_wage(breakdown, department_id=employee.department_id)

    def generate_for_employee(self, employee_id: int, start: date, end: date) -> WageRecord:
        """Create the wage record; raises AlreadyGenerated if one exists."""
        if end < start:
            raise ValueError("Period end must not be before period start")
        return self._generate(self._get_employee(employee_id), start, end)

    def generate_for_period(self, start: date, end: date, *, department_id: Optional[int] = None) -> BatchReport:
        """Generate wages for every eligible employee; never aborts on one employee's failure."""
        if end < start:
            raise ValueError("Period end must not be before period start")

        report = BatchReport(period_start=start, period_end=end)
        for employee in self._employees.list_employees(department_id=department_id):
            try:
                if not employee.is_eligible_for(start):
                    continue
                record = self._generate(employee, start, end)
            except AlreadyGenerated:
                report.skipped.append(employee.employee_id)
                logger.info(
                    "wage already generated, skipping",
                    extra={"employee_id": employee.employee_id, "period_start": start.isoformat()},
                )
            except Exception as exc:
                report.failures.append(GenerationFailure(employee_id=employee.employee_id, error=str(exc)))
                logger.warning(
                    "wage generation failed",
                    extra={"employee_id": employee.employee_id, "error_type": type(exc).__name__, "error": str(exc)},
                )
            else:
                report.created.append(record)
                logger.info(
                    "wage generated",
                    extra={"employee_id": employee.employee_id, "total_payable": record.total_payable},
                )

        logger.info(
            "wage batch finished",
            extra={
                "period_start": start.isoformat(),
                "period_end": end.isoformat(),
                "created": len(report.created),
                "skipped": len(report.skipped),
                "failed": len(report.failures),
            },
        )
        return report

    def handle_contract_category_change(self, employee_id: int, new_category: ContractCategory) -> list[WageRecord]:
        """Recompute every unpaid wage with the rate of ``new_category``; paid wages stay as they are."""
        employee = self._get_employee(employee_id)
        category = ContractCategory(new_category)

        updated = []
        for wage in self._wages.list_unpaid_for_employee(employee_id):
            if wage.is_paid:
                continue
            breakdown = self._calculate(employee, wage.period_start, wage.period_end, contract_category=category)
            updated.append(self._wages.update_wage(wage.wage_id, **_wage_fields(breakdown)))

        if updated:
            logger.info(
                "unpaid wages recomputed after contract change",
                extra={"employee_id": employee_id, "contract_category": category.value, "count": len(updated)},
            )
        return updated

    def process_payments(self, wage_ids: Sequence[int], *, paid_at: Optional[datetime] = None) -> int:
        count = self._wages.mark_paid(list(wage_ids), paid_at=paid_at or datetime.now())
        logger.info("wages marked paid", extra={"requested": len(wage_ids), "paid": count})
        return count

    def wage_statistics(self, start: date, end: date) -> WageStatistics:
        records = self._wages.list_in_range(start, end)

        per_dept: dict[int, list[int]] = {}
        for r in records:
            per_dept.setdefault(r.department_id, []).append(r.total_payable)

        return WageStatistics(
            total_records=len(records),
            total_amount=sum(r.total_payable for r in records),
            paid_count=sum(1 for r in records if r.is_paid),
            unpaid_count=sum(1 for r in records if not r.is_paid),
            by_department={
                dept: DepartmentWageStats(count=len(totals), total_amount=sum(totals), average=sum(totals) / len(totals))
                for dept, totals in per_dept.items()
            },
        )
