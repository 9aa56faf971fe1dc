from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, integrity_as_conflict
from .model import AttendanceEntry, AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.employee_id, a.work_date, a.time_in, a.time_out, a.status, a.note,
           e.name AS employee_name, e.nik AS employee_nik
    FROM attendance a
    JOIN employees e ON e.employee_id = a.employee_id
"""

_CONFLICTS = {
    "duplicate": "Attendance already recorded for this employee and date",
    "missing_reference": "Employee not found",
}


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        time_in=r.get("time_in"),
        time_out=r.get("time_out"),
        status=AttendanceStatus(r["status"]),
        note=r.get("note"),
        employee_name=r.get("employee_name"),
        employee_nik=r.get("employee_nik"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY a.work_date DESC, e.name")
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.attendance_id=%s", (attendance_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.employee_id=%s AND a.work_date BETWEEN %s AND %s ORDER BY a.work_date",
                (employee_id, start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def count_by_status(self, employee_id: int, *, start_date: date, end_date: date) -> Mapping[AttendanceStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT status, COUNT(*) AS total
                FROM attendance
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                GROUP BY status
                """,
                (employee_id, start_date, end_date),
            )
            return {AttendanceStatus(r["status"]): int(r["total"]) for r in fetchall(cur)}

    def create(self, entry: AttendanceEntry) -> int:
        with integrity_as_conflict(**_CONFLICTS):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(employee_id, work_date, time_in, time_out, status, note)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (entry.employee_id, entry.work_date, entry.time_in, entry.time_out, entry.status.value, entry.note),
                )
                return int(cur.lastrowid)

    def update(self, attendance_id: int, entry: AttendanceEntry) -> bool:
        with integrity_as_conflict(**_CONFLICTS):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE attendance
                    SET employee_id=%s, work_date=%s, time_in=%s, time_out=%s, status=%s, note=%s
                    WHERE attendance_id=%s
                    """,
                    (
                        entry.employee_id,
                        entry.work_date,
                        entry.time_in,
                        entry.time_out,
                        entry.status.value,
                        entry.note,
                        attendance_id,
                    ),
                )
                return cur.rowcount > 0

    def delete_by_id(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE attendance_id=%s", (attendance_id,))
            return cur.rowcount > 0
