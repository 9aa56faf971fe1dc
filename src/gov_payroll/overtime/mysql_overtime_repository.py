from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import to_money
from ..core.enums import OvertimeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, integrity_as_conflict
from .model import OvertimeDraft, OvertimeEntry
from .repository import OvertimeRepository

_SELECT = """
    SELECT o.overtime_id, o.employee_id, o.work_date, o.start_time, o.end_time, o.total_hours,
           o.hourly_rate, o.amount, o.description, o.status, o.approved_by,
           e.name AS employee_name
    FROM overtime o
    JOIN employees e ON e.employee_id = o.employee_id
"""


def _row_to_entry(r: dict) -> OvertimeEntry:
    return OvertimeEntry(
        overtime_id=int(r["overtime_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        start_time=r.get("start_time"),
        end_time=r.get("end_time"),
        total_hours=Decimal(str(r["total_hours"])),
        hourly_rate=to_money(r["hourly_rate"]),
        amount=to_money(r["amount"]),
        description=r.get("description"),
        status=OvertimeStatus(r["status"]),
        approved_by=r.get("approved_by"),
        employee_name=r.get("employee_name"),
    )


class MySQLOvertimeRepository(OvertimeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[OvertimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY o.work_date DESC, o.overtime_id DESC")
            return [_row_to_entry(r) for r in fetchall(cur)]

    def get_by_id(self, overtime_id: int) -> Optional[OvertimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE o.overtime_id=%s", (overtime_id,))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def list_for_employee(self, employee_id: int) -> Sequence[OvertimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE o.employee_id=%s ORDER BY o.work_date DESC", (employee_id,))
            return [_row_to_entry(r) for r in fetchall(cur)]

    def list_for_period(self, *, month: int, year: int) -> Sequence[OvertimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE MONTH(o.work_date)=%s AND YEAR(o.work_date)=%s ORDER BY o.work_date, e.name",
                (month, year),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def list_zero_rate(self) -> Sequence[OvertimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE o.hourly_rate = 0 ORDER BY o.overtime_id")
            return [_row_to_entry(r) for r in fetchall(cur)]

    def sum_approved_amount(self, employee_id: int, *, month: int, year: int) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(SUM(amount), 0) AS total
                FROM overtime
                WHERE employee_id=%s AND status=%s AND MONTH(work_date)=%s AND YEAR(work_date)=%s
                """,
                (employee_id, OvertimeStatus.APPROVED.value, month, year),
            )
            row = fetchone(cur)
            return to_money(row["total"] if row else 0)

    def create(self, draft: OvertimeDraft) -> int:
        with integrity_as_conflict(duplicate="Overtime already recorded", missing_reference="Employee not found"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO overtime(employee_id, work_date, start_time, end_time, total_hours,
                                         hourly_rate, amount, description, status)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        draft.employee_id,
                        draft.work_date,
                        draft.start_time,
                        draft.end_time,
                        draft.total_hours,
                        draft.hourly_rate,
                        draft.amount,
                        draft.description,
                        draft.status.value,
                    ),
                )
                return int(cur.lastrowid)

    def update(self, overtime_id: int, draft: OvertimeDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE overtime
                SET work_date=%s, start_time=%s, end_time=%s, total_hours=%s, hourly_rate=%s,
                    amount=%s, description=%s, status=%s
                WHERE overtime_id=%s
                """,
                (
                    draft.work_date,
                    draft.start_time,
                    draft.end_time,
                    draft.total_hours,
                    draft.hourly_rate,
                    draft.amount,
                    draft.description,
                    draft.status.value,
                    overtime_id,
                ),
            )
            return cur.rowcount > 0

    def set_status(self, overtime_id: int, *, status: OvertimeStatus, approved_by: Optional[int]) -> bool:
        with integrity_as_conflict(duplicate="Overtime already recorded", missing_reference="Approver not found"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE overtime SET status=%s, approved_by=%s WHERE overtime_id=%s",
                    (status.value, approved_by, overtime_id),
                )
                return cur.rowcount > 0

    def set_rate(self, overtime_id: int, *, hourly_rate: Decimal, amount: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE overtime SET hourly_rate=%s, amount=%s WHERE overtime_id=%s",
                (hourly_rate, amount, overtime_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, overtime_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM overtime WHERE overtime_id=%s", (overtime_id,))
            return cur.rowcount > 0
