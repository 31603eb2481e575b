from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import ShiftDefinition
from .repository import ShiftRepository

_COLUMNS = """
    shift_id, shift_name, main_work_start, main_work_end,
    lunch_break_start, lunch_break_end, overtime_start, overtime_end,
    weekly_overtime_start, weekly_overtime_end
"""


def _to_shift(r: Dict[str, Any]) -> ShiftDefinition:
    return ShiftDefinition(
        shift_id=int(r["shift_id"]),
        shift_name=r["shift_name"],
        main_work_start=normalize_mysql_time(r["main_work_start"]),
        main_work_end=normalize_mysql_time(r["main_work_end"]),
        lunch_break_start=normalize_mysql_time(r.get("lunch_break_start")),
        lunch_break_end=normalize_mysql_time(r.get("lunch_break_end")),
        overtime_start=normalize_mysql_time(r.get("overtime_start")),
        overtime_end=normalize_mysql_time(r.get("overtime_end")),
        weekly_overtime_start=normalize_mysql_time(r.get("weekly_overtime_start")),
        weekly_overtime_end=normalize_mysql_time(r.get("weekly_overtime_end")),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ShiftDefinition]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts ORDER BY shift_id")
            return [_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[ShiftDefinition]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (shift_id,))
            r = fetchone(cur)
            return _to_shift(r) if r else None
