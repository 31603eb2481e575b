from __future__ import annotations

from dataclasses import dataclass

from .attendance.calculator.standard_calculator import StandardWorkHourCalculator
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .attendance.validator import AttendanceTimeValidator
from .core.constants import (
    DEFAULT_EARLY_CHECK_IN_HOURS,
    DEFAULT_LATE_CHECK_OUT_HOURS,
    DEFAULT_LATE_ROUNDING_MINUTES,
    DEFAULT_WEEK_START_WEEKDAY,
    DEFAULT_WEEKLY_NORMAL_HOURS,
)
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .overtime.reconciler import WeeklyOvertimeReconciler
from .payroll.mysql_allowance_repository import MySQLAllowanceRepository
from .payroll.mysql_rate_repository import MySQLRateRepository
from .payroll.mysql_wage_repository import MySQLWageRepository
from .payroll.service import WageService
from .shifts.mysql_shift_repository import MySQLShiftRepository


@dataclass(frozen=True)
class EngineSettings:
    weekly_normal_hours: float = DEFAULT_WEEKLY_NORMAL_HOURS
    late_rounding_minutes: int = DEFAULT_LATE_ROUNDING_MINUTES
    early_check_in_hours: float = DEFAULT_EARLY_CHECK_IN_HOURS
    late_check_out_hours: float = DEFAULT_LATE_CHECK_OUT_HOURS
    week_start_weekday: int = DEFAULT_WEEK_START_WEEKDAY


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    shifts_repo: MySQLShiftRepository
    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository
    rates_repo: MySQLRateRepository
    allowances_repo: MySQLAllowanceRepository
    wages_repo: MySQLWageRepository

    attendance_service: AttendanceService
    weekly_reconciler: WeeklyOvertimeReconciler
    wage_service: WageService


def build_container(*, db_config: dict, settings: EngineSettings | None = None) -> Container:
    settings = settings or EngineSettings()
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    shifts_repo = MySQLShiftRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    rates_repo = MySQLRateRepository(conn)
    allowances_repo = MySQLAllowanceRepository(conn)
    wages_repo = MySQLWageRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        shifts_repo,
        calculator=StandardWorkHourCalculator(rounding_minutes=settings.late_rounding_minutes),
        validator=AttendanceTimeValidator(
            early_check_in_hours=settings.early_check_in_hours,
            late_check_out_hours=settings.late_check_out_hours,
        ),
    )
    weekly_reconciler = WeeklyOvertimeReconciler(
        attendance_repo,
        ceiling_hours=settings.weekly_normal_hours,
        week_start_weekday=settings.week_start_weekday,
    )
    wage_service = WageService(attendance_repo, employees_repo, rates_repo, allowances_repo, wages_repo)

    return Container(
        conn=conn,
        shifts_repo=shifts_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        rates_repo=rates_repo,
        allowances_repo=allowances_repo,
        wages_repo=wages_repo,
        attendance_service=attendance_service,
        weekly_reconciler=weekly_reconciler,
        wage_service=wage_service,
    )
