from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, integrity_as_conflict
from .model import User
from .repository import UserRepository

_SELECT = """
    SELECT user_id, username, password_hash, name, email, role, is_active, employee_id
    FROM users
"""


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        name=row["name"],
        email=row.get("email"),
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        employee_id=row.get("employee_id"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE username=%s", (username,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY user_id")
            return [_row_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        name: str,
        email: Optional[str],
        role: Role,
        employee_id: Optional[int],
    ) -> int:
        with integrity_as_conflict(
            duplicate="Username already exists",
            missing_reference="Linked employee does not exist",
        ):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(username, password_hash, name, email, role, is_active, employee_id)
                    VALUES(%s,%s,%s,%s,%s,1,%s)
                    """,
                    (username, password_hash, name, email, role.value, employee_id),
                )
                return int(cur.lastrowid)

    def update_user(
        self,
        user_id: int,
        *,
        username: str,
        name: str,
        email: Optional[str],
        role: Role,
        employee_id: Optional[int],
        is_active: bool,
    ) -> bool:
        with integrity_as_conflict(
            duplicate="Username already exists",
            missing_reference="Linked employee does not exist",
        ):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE users
                    SET username=%s, name=%s, email=%s, role=%s, employee_id=%s, is_active=%s
                    WHERE user_id=%s
                    """,
                    (username, name, email, role.value, employee_id, 1 if is_active else 0, user_id),
                )
                return cur.rowcount > 0

    def update_password(self, user_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, user_id))
            return cur.rowcount > 0

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET is_active=%s WHERE user_id=%s", (1 if is_active else 0, user_id))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0
