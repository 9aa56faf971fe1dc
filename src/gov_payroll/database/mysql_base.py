from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import ConflictError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def integrity_as_conflict(
    *,
    duplicate: str,
    referenced: Optional[str] = None,
    missing_reference: Optional[str] = None,
) -> Iterator[None]:
    """Translate MySQL integrity errors into ConflictError with a readable message.

    duplicate          -> UNIQUE key violation (1062)
    referenced         -> row still referenced by a RESTRICT foreign key (1451)
    missing_reference  -> foreign key points at a missing row (1452)
    """

    try:
        yield
    except IntegrityError as e:
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise ConflictError(duplicate) from e
        if referenced and e.errno == errorcode.ER_ROW_IS_REFERENCED_2:
            raise ConflictError(referenced) from e
        if missing_reference and e.errno == errorcode.ER_NO_REFERENCED_ROW_2:
            raise ConflictError(missing_reference) from e
        raise


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
