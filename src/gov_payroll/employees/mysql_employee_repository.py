from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, integrity_as_conflict
from ..positions.mysql_position_repository import row_to_position
from .model import Employee, EmployeeInput
from .repository import EmployeeRepository

_SELECT = """
    SELECT e.employee_id, e.nik, e.name, e.email, e.phone, e.address, e.position_id,
           e.join_date, e.status,
           p.position_id AS p_position_id, p.name AS p_name, p.base_pay AS p_base_pay,
           p.position_allowance AS p_position_allowance, p.overtime_rate AS p_overtime_rate
    FROM employees e
    LEFT JOIN positions p ON p.position_id = e.position_id
"""

_CONFLICTS = {
    "duplicate": "NIK already registered",
    "missing_reference": "Position does not exist",
}


def _row_to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        nik=row["nik"],
        name=row["name"],
        email=row.get("email"),
        phone=row.get("phone"),
        address=row.get("address"),
        position_id=row.get("position_id"),
        join_date=row.get("join_date"),
        status=EmployeeStatus(row["status"]),
        position=row_to_position(row, prefix="p_") if row.get("p_position_id") else None,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY e.name")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def search(self, query: str) -> Sequence[Employee]:
        pattern = f"%{query}%"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE e.nik LIKE %s OR e.name LIKE %s OR e.email LIKE %s ORDER BY e.name",
                (pattern, pattern, pattern),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def list_by_status(self, status: EmployeeStatus) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.status=%s ORDER BY e.name", (status.value,))
            return [_row_to_employee(r) for r in fetchall(cur)]

    def create(self, data: EmployeeInput) -> int:
        with integrity_as_conflict(**_CONFLICTS):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(nik, name, email, phone, address, position_id, join_date, status)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        data.nik,
                        data.name,
                        data.email,
                        data.phone,
                        data.address,
                        data.position_id,
                        data.join_date,
                        data.status.value,
                    ),
                )
                return int(cur.lastrowid)

    def update(self, employee_id: int, data: EmployeeInput) -> bool:
        with integrity_as_conflict(**_CONFLICTS):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE employees
                    SET nik=%s, name=%s, email=%s, phone=%s, address=%s, position_id=%s, join_date=%s, status=%s
                    WHERE employee_id=%s
                    """,
                    (
                        data.nik,
                        data.name,
                        data.email,
                        data.phone,
                        data.address,
                        data.position_id,
                        data.join_date,
                        data.status.value,
                        employee_id,
                    ),
                )
                return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        with integrity_as_conflict(
            duplicate="Employee cannot be deleted",
            referenced="Employee has salary records and cannot be deleted",
        ):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM employees WHERE employee_id=%s", (employee_id,))
                return cur.rowcount > 0
