from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AllowanceEntitlement
from .repository import AllowanceRepository


class MySQLAllowanceRepository(AllowanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_allowances(self, employee_id: int) -> Sequence[AllowanceEntitlement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, allowance_type, amount
                FROM employee_allowances
                WHERE employee_id=%s
                ORDER BY allowance_id
                """,
                (int(employee_id),),
            )
            return [
                AllowanceEntitlement(
                    employee_id=int(r["employee_id"]),
                    allowance_type=r["allowance_type"],
                    amount=int(r["amount"]),
                )
                for r in fetchall(cur)
            ]
