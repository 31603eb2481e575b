from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import ContractCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        full_name=r["full_name"],
        contract_category=ContractCategory(r["contract_category"]),
        department_id=int(r["department_id"]),
        shift_id=r.get("shift_id"),
        contract_end_date=r.get("contract_end_date"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, contract_category, department_id, shift_id, contract_end_date
                FROM employees
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_employees(self, *, department_id: Optional[int] = None) -> Sequence[Employee]:
        where = ""
        params: tuple = ()
        if department_id is not None:
            where = "WHERE department_id=%s"
            params = (int(department_id),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, full_name, contract_category, department_id, shift_id, contract_end_date
                FROM employees
                {where}
                ORDER BY employee_id
                """,
                params,
            )
            return [_to_employee(r) for r in fetchall(cur)]
