from __future__ import annotations

from typing import Optional, Sequence

from ..common.money import to_money
from ..core.constants import NO_POSITION_LABEL
from ..core.enums import SalaryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, integrity_as_conflict
from .model import Salary, SalaryComponents, SalaryDraft
from .repository import SalaryRepository

_SELECT = """
    SELECT s.salary_id, s.employee_id, s.period_month, s.period_year, s.base_pay, s.position_allowance,
           s.transport_allowance, s.meal_allowance, s.overtime_amount, s.deductions, s.total, s.status,
           e.name AS employee_name, e.nik AS employee_nik,
           COALESCE(p.name, %s) AS position_name
    FROM salaries s
    JOIN employees e ON e.employee_id = s.employee_id
    LEFT JOIN positions p ON p.position_id = e.position_id
"""

_NEWEST_FIRST = " ORDER BY s.period_year DESC, s.period_month DESC, e.name"

_CONFLICTS = {
    "duplicate": "Salary already exists for this period",
    "missing_reference": "Employee not found",
}

_INSERT = """
    INSERT INTO salaries(employee_id, period_month, period_year, base_pay, position_allowance,
                         transport_allowance, meal_allowance, overtime_amount, deductions, total, status)
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
"""


def row_to_salary(r: dict) -> Salary:
    return Salary(
        salary_id=int(r["salary_id"]),
        employee_id=int(r["employee_id"]),
        month=int(r["period_month"]),
        year=int(r["period_year"]),
        components=SalaryComponents(
            base_pay=to_money(r["base_pay"]),
            position_allowance=to_money(r["position_allowance"]),
            transport_allowance=to_money(r["transport_allowance"]),
            meal_allowance=to_money(r["meal_allowance"]),
            overtime_amount=to_money(r["overtime_amount"]),
            deductions=to_money(r["deductions"]),
        ),
        total=to_money(r["total"]),
        status=SalaryStatus(r["status"]),
        employee_name=r.get("employee_name"),
        employee_nik=r.get("employee_nik"),
        position_name=r.get("position_name"),
    )


def _insert_params(d: SalaryDraft) -> tuple:
    c = d.components
    return (
        d.employee_id,
        d.month,
        d.year,
        c.base_pay,
        c.position_allowance,
        c.transport_allowance,
        c.meal_allowance,
        c.overtime_amount,
        c.deductions,
        d.total,
        d.status.value,
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + _NEWEST_FIRST, (NO_POSITION_LABEL,))
            return [row_to_salary(r) for r in fetchall(cur)]

    def get_by_id(self, salary_id: int) -> Optional[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.salary_id=%s", (NO_POSITION_LABEL, salary_id))
            r = fetchone(cur)
            return row_to_salary(r) if r else None

    def list_for_period(self, *, month: int, year: int) -> Sequence[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE s.period_month=%s AND s.period_year=%s ORDER BY e.name",
                (NO_POSITION_LABEL, month, year),
            )
            return [row_to_salary(r) for r in fetchall(cur)]

    def list_for_employee(
        self,
        employee_id: int,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[Salary]:
        where = " WHERE s.employee_id=%s"
        params: list = [NO_POSITION_LABEL, employee_id]
        if month is not None:
            where += " AND s.period_month=%s"
            params.append(month)
        if year is not None:
            where += " AND s.period_year=%s"
            params.append(year)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + where + _NEWEST_FIRST, tuple(params))
            return [row_to_salary(r) for r in fetchall(cur)]

    def exists_for_period(self, employee_id: int, *, month: int, year: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM salaries WHERE employee_id=%s AND period_month=%s AND period_year=%s",
                (employee_id, month, year),
            )
            return fetchone(cur) is not None

    def count_for_employee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM salaries WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def create(self, draft: SalaryDraft) -> int:
        with integrity_as_conflict(**_CONFLICTS):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(_INSERT, _insert_params(draft))
                return int(cur.lastrowid)

    def create_many(self, drafts: Sequence[SalaryDraft]) -> int:
        if not drafts:
            return 0
        # One connection, one commit: db_cursor rolls everything back on failure.
        with integrity_as_conflict(**_CONFLICTS):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.executemany(_INSERT, [_insert_params(d) for d in drafts])
                return len(drafts)

    def update(self, salary_id: int, draft: SalaryDraft) -> bool:
        c = draft.components
        with integrity_as_conflict(**_CONFLICTS):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE salaries
                    SET employee_id=%s, period_month=%s, period_year=%s, base_pay=%s, position_allowance=%s,
                        transport_allowance=%s, meal_allowance=%s, overtime_amount=%s, deductions=%s,
                        total=%s, status=%s
                    WHERE salary_id=%s
                    """,
                    (
                        draft.employee_id,
                        draft.month,
                        draft.year,
                        c.base_pay,
                        c.position_allowance,
                        c.transport_allowance,
                        c.meal_allowance,
                        c.overtime_amount,
                        c.deductions,
                        draft.total,
                        draft.status.value,
                        salary_id,
                    ),
                )
                return cur.rowcount > 0

    def set_status(self, salary_id: int, status: SalaryStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE salaries SET status=%s WHERE salary_id=%s", (status.value, salary_id))
            return cur.rowcount > 0

    def delete_by_id(self, salary_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salaries WHERE salary_id=%s", (salary_id,))
            return cur.rowcount > 0
