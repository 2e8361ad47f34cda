from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[tuple]:
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


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def query_all(conn_factory: DatabaseConnection, sql: str, params: Sequence[object] = ()) -> List[Dict[str, Any]]:
    """Run a read-only query and return every row as a dict."""
    with db_cursor(conn_factory) as (_, cur):
        cur.execute(sql, tuple(params))
        return fetchall(cur)


def query_one(conn_factory: DatabaseConnection, sql: str, params: Sequence[object] = ()) -> Optional[Dict[str, Any]]:
    with db_cursor(conn_factory) as (_, cur):
        cur.execute(sql, tuple(params))
        return fetchone(cur)
