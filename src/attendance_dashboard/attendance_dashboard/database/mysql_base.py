from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import parse_hhmm
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction.

    Everything executed inside the block is committed together when it exits
    cleanly and rolled back if it raises.
    """

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
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or ())


def schedule_time(value: Any) -> Optional[time]:
    """TIME column to a minute-precision ``time``.

    The connector hands TIME back as ``timedelta`` (sometimes ``time`` or a
    string); schedules only care about hours and minutes.
    """
    if value is None:
        return None
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if isinstance(value, timedelta):
        minutes = int(value.total_seconds()) // 60 % (24 * 60)
        return time(minutes // 60, minutes % 60)
    if isinstance(value, str):
        return parse_hhmm(value)
    raise TypeError(f"Unexpected TIME value from MySQL: {type(value)!r}")
