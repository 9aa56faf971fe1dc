from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import to_money
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Position
from .repository import PositionRepository


def row_to_position(row: dict, *, prefix: str = "") -> Position:
    return Position(
        position_id=int(row[f"{prefix}position_id"]),
        name=row[f"{prefix}name"],
        base_pay=to_money(row[f"{prefix}base_pay"]),
        position_allowance=to_money(row.get(f"{prefix}position_allowance")),
        overtime_rate=to_money(row.get(f"{prefix}overtime_rate")),
    )


class MySQLPositionRepository(PositionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Position]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT position_id, name, base_pay, position_allowance, overtime_rate
                FROM positions
                ORDER BY name
                """
            )
            return [row_to_position(r) for r in fetchall(cur)]

    def get_by_id(self, position_id: int) -> Optional[Position]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT position_id, name, base_pay, position_allowance, overtime_rate
                FROM positions
                WHERE position_id=%s
                """,
                (position_id,),
            )
            row = fetchone(cur)
            return row_to_position(row) if row else None

    def create(self, *, name: str, base_pay: Decimal, position_allowance: Decimal, overtime_rate: Decimal) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO positions(name, base_pay, position_allowance, overtime_rate)
                VALUES(%s,%s,%s,%s)
                """,
                (name, base_pay, position_allowance, overtime_rate),
            )
            return int(cur.lastrowid)

    def update(
        self,
        position_id: int,
        *,
        name: str,
        base_pay: Decimal,
        position_allowance: Decimal,
        overtime_rate: Decimal,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE positions
                SET name=%s, base_pay=%s, position_allowance=%s, overtime_rate=%s
                WHERE position_id=%s
                """,
                (name, base_pay, position_allowance, overtime_rate, position_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, position_id: int) -> bool:
        # employees.position_id is ON DELETE SET NULL
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM positions WHERE position_id=%s", (position_id,))
            return cur.rowcount > 0
