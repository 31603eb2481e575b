from __future__ import annotations

from typing import Optional

from ..core.enums import ContractCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import PayRateConfig
from .repository import RateRepository


class MySQLRateRepository(RateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_rate(self, contract_category: ContractCategory, department_id: int) -> Optional[PayRateConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT contract_category, department_id, main_work_hour_rate, regular_overtime_rate, weekly_overtime_rate
                FROM salary_rates
                WHERE contract_category=%s AND department_id=%s
                """,
                (ContractCategory(contract_category).value, int(department_id)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return PayRateConfig(
                contract_category=ContractCategory(r["contract_category"]),
                department_id=int(r["department_id"]),
                main_work_hour_rate=int(r["main_work_hour_rate"]),
                regular_overtime_rate=int(r["regular_overtime_rate"]),
                weekly_overtime_rate=int(r["weekly_overtime_rate"]),
            )
