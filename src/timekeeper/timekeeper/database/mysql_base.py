from __future__ import annotations

from contextlib import contextmanager
from typing import Optional

from .connection import DatabaseConnection

READ_COMMITTED = "READ COMMITTED"


@contextmanager
def db_cursor(
    conn_factory: DatabaseConnection,
    *,
    dictionary: bool = True,
    isolation_level: Optional[str] = None,
):
    """Yield ``(conn, cursor)`` inside one transaction.

    Commits when the block finishes, rolls back and re-raises on any error.
    ``isolation_level`` opens the transaction explicitly at that level; the
    check-in path uses READ COMMITTED so its locking re-read sees a row that a
    concurrent request has just committed.
    """
    conn = conn_factory.connect()
    cur = None
    try:
        if isolation_level:
            conn.start_transaction(isolation_level=isolation_level)
        cur = conn.cursor(dictionary=dictionary)
        yield conn, cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        if cur is not None:
            cur.close()
        conn.close()
