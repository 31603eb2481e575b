from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import PaymentStatus
from ..core.exceptions import AlreadyGenerated
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WageBreakdown, WageRecord
from .repository import WageRepository

_COLUMNS = """
    wage_id, employee_id, department_id, period_start, period_end,
    main_work_hours, regular_overtime_hours, weekly_overtime_hours,
    base_salary, overtime_salary, weekly_overtime_salary,
    total_allowances, total_payable, payment_status, paid_at
"""

UPDATABLE_FIELDS = frozenset(
    {
        "main_work_hours",
        "regular_overtime_hours",
        "weekly_overtime_hours",
        "base_salary",
        "overtime_salary",
        "weekly_overtime_salary",
        "total_allowances",
        "total_payable",
    }
)


def _to_wage(r: Dict[str, Any]) -> WageRecord:
    return WageRecord(
        wage_id=int(r["wage_id"]),
        employee_id=int(r["employee_id"]),
        department_id=int(r["department_id"]),
        period_start=r["period_start"],
        period_end=r["period_end"],
        main_work_hours=float(r["main_work_hours"]),
        regular_overtime_hours=float(r["regular_overtime_hours"]),
        weekly_overtime_hours=float(r["weekly_overtime_hours"]),
        base_salary=int(r["base_salary"]),
        overtime_salary=int(r["overtime_salary"]),
        weekly_overtime_salary=int(r["weekly_overtime_salary"]),
        total_allowances=int(r["total_allowances"]),
        total_payable=int(r["total_payable"]),
        payment_status=PaymentStatus(r["payment_status"]),
        paid_at=r.get("paid_at"),
    )


class MySQLWageRepository(WageRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get(self, cur, wage_id: int) -> WageRecord:
        cur.execute(f"SELECT {_COLUMNS} FROM wages WHERE wage_id=%s", (int(wage_id),))
        r = fetchone(cur)
        if not r:
            raise LookupError(f"Wage record {wage_id} not found")
        return _to_wage(r)

    def find_existing_wage(self, employee_id: int, period_start: date, period_end: date) -> Optional[WageRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM wages
                WHERE employee_id=%s AND period_start=%s AND period_end=%s
                """,
                (int(employee_id), period_start, period_end),
            )
            r = fetchone(cur)
            return _to_wage(r) if r else None

    def create_wage(self, breakdown: WageBreakdown, *, department_id: int) -> WageRecord:
        hours = breakdown.hours
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO wages(
                        employee_id, department_id, period_start, period_end,
                        main_work_hours, regular_overtime_hours, weekly_overtime_hours,
                        base_salary, overtime_salary, weekly_overtime_salary,
                        total_allowances, total_payable, payment_status
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        breakdown.employee_id,
                        int(department_id),
                        breakdown.period_start,
                        breakdown.period_end,
                        hours.main_work_hours,
                        hours.regular_overtime_hours,
                        hours.weekly_overtime_hours,
                        breakdown.base_salary,
                        breakdown.overtime_salary,
                        breakdown.weekly_overtime_salary,
                        breakdown.total_allowances,
                        breakdown.total_payable,
                        PaymentStatus.UNPAID.value,
                    ),
                )
                return self._get(cur, int(cur.lastrowid))
        except mysql.connector.IntegrityError as exc:
            # uq_wage_period: another writer created the same (employee, period).
            raise AlreadyGenerated(breakdown.employee_id, breakdown.period_start, breakdown.period_end) from exc

    def update_wage(self, wage_id: int, **fields: Any) -> WageRecord:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update wage fields: {sorted(unknown)}")

        columns = sorted(fields)
        assignments = ", ".join(f"{c}=%s" for c in columns)
        with db_cursor(self._conn_factory) as (_, cur):
            if columns:
                cur.execute(
                    f"UPDATE wages SET {assignments} WHERE wage_id=%s AND payment_status=%s",
                    (*[fields[c] for c in columns], int(wage_id), PaymentStatus.UNPAID.value),
                )
            return self._get(cur, wage_id)

    def list_unpaid_for_employee(self, employee_id: int) -> Sequence[WageRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM wages
                WHERE employee_id=%s AND payment_status=%s
                ORDER BY period_start
                """,
                (int(employee_id), PaymentStatus.UNPAID.value),
            )
            return [_to_wage(r) for r in fetchall(cur)]

    def list_in_range(self, start: date, end: date) -> Sequence[WageRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM wages
                WHERE period_start BETWEEN %s AND %s
                ORDER BY period_start DESC, employee_id
                """,
                (start, end),
            )
            return [_to_wage(r) for r in fetchall(cur)]

    def mark_paid(self, wage_ids: Sequence[int], *, paid_at: datetime) -> int:
        ids = [int(i) for i in wage_ids]
        if not ids:
            return 0
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE wages
                SET payment_status=%s, paid_at=%s
                WHERE payment_status=%s AND wage_id IN ({placeholders})
                """,
                (PaymentStatus.PAID.value, paid_at, PaymentStatus.UNPAID.value, *ids),
            )
            return int(cur.rowcount)
