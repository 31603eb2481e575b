from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_float
from .model import AttendanceEvent
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, check_in_time, check_out_time,
    main_work_hours, regular_overtime_hours, weekly_overtime_hours
"""

UPDATABLE_FIELDS = frozenset(
    {"check_out_time", "main_work_hours", "regular_overtime_hours", "weekly_overtime_hours"}
)


def _to_event(r: Dict[str, Any]) -> AttendanceEvent:
    return AttendanceEvent(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        main_work_hours=optional_float(r.get("main_work_hours")),
        regular_overtime_hours=optional_float(r.get("regular_overtime_hours")),
        weekly_overtime_hours=optional_float(r.get("weekly_overtime_hours")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_event(r) if r else None

    def create_checkin(self, *, employee_id: int, work_date: date, check_in_time: datetime) -> AttendanceEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, check_in_time)
                VALUES(%s,%s,%s)
                """,
                (employee_id, work_date, check_in_time),
            )
            attendance_id = int(cur.lastrowid)
        return AttendanceEvent(
            attendance_id=attendance_id,
            employee_id=employee_id,
            work_date=work_date,
            check_in_time=check_in_time,
        )

    def find_attendance_in_range(self, employee_id: int, start: date, end: date) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date
                """,
                (employee_id, start, end),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def update_attendance(self, attendance_id: int, **fields: Any) -> AttendanceEvent:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update attendance fields: {sorted(unknown)}")
        if not fields:
            raise ValueError("No attendance fields to update")

        columns = sorted(fields)
        assignments = ", ".join(f"{c}=%s" for c in columns)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE attendance_records SET {assignments} WHERE attendance_id=%s",
                (*[fields[c] for c in columns], int(attendance_id)),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
        if not r:
            raise LookupError(f"Attendance record {attendance_id} not found")
        return _to_event(r)
