from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..security.crypto import FieldCodecs
from .model import AttendanceRecord, AttendanceUpsert
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = "attendance_id, user_id, work_date, clock_in_enc, clock_out_enc, status_enc, is_holiday, notes_enc"


class MySQLAttendanceRepository(AttendanceRepository):
    """Attendance rows with clock times, status and notes encrypted at rest."""

    def __init__(self, conn_factory: DatabaseConnection, codecs: FieldCodecs):
        self._conn_factory = conn_factory
        self._codecs = codecs

    def _decode_status(self, stored: Optional[str]) -> Optional[AttendanceStatus]:
        value = self._codecs.text.decode(stored)
        if not value:
            return None
        try:
            return AttendanceStatus(value)
        except ValueError:
            logger.warning("Unknown attendance status %r; treating as unset", value)
            return None

    def _to_record(self, r: Dict[str, Any]) -> AttendanceRecord:
        return AttendanceRecord(
            attendance_id=int(r["attendance_id"]),
            user_id=int(r["user_id"]),
            work_date=r["work_date"],
            clock_in=self._codecs.moment.decode(r.get("clock_in_enc")),
            clock_out=self._codecs.moment.decode(r.get("clock_out_enc")),
            status=self._decode_status(r.get("status_enc")),
            is_holiday=bool(r.get("is_holiday")),
            notes=self._codecs.text.decode(r.get("notes_enc")),
        )

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE work_date=%s ORDER BY user_id ASC",
                (work_date,),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    def list_in_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if start is not None:
            clauses.append("work_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("work_date <= %s")
            params.append(end)
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                {where}
                ORDER BY work_date ASC, user_id ASC
                """,
                tuple(params),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    def upsert(self, change: AttendanceUpsert) -> int:
        values = {
            "user_id": int(change.user_id),
            "work_date": change.work_date,
            "is_holiday": int(change.is_holiday),
            "status_enc": self._codecs.text.encode(change.status.value if change.status else None),
            "notes_enc": self._codecs.text.encode(change.notes),
            "clock_in_enc": self._codecs.moment.encode(change.clock_in),
            "clock_out_enc": self._codecs.moment.encode(change.clock_out),
        }

        updated = ["is_holiday"]
        if change.write_status:
            updated.append("status_enc")
        if change.write_notes:
            updated.append("notes_enc")
        if change.write_clock_in:
            updated.append("clock_in_enc")
        if change.write_clock_out:
            updated.append("clock_out_enc")

        columns = ", ".join(values)
        placeholders = ",".join(["%s"] * len(values))
        assignments = ", ".join(f"{col}=VALUES({col})" for col in updated)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_records({columns})
                VALUES({placeholders})
                ON DUPLICATE KEY UPDATE {assignments}
                """,
                tuple(values.values()),
            )

            cur.execute(
                "SELECT attendance_id FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(change.user_id), change.work_date),
            )
            r = fetchone(cur)
            return int(r["attendance_id"]) if r else 0

    def set_holiday_for_users(self, *, user_ids: Sequence[int], work_date: date, is_holiday: bool) -> int:
        rows = [(int(uid), work_date, int(is_holiday)) for uid in user_ids]
        if not rows:
            return 0

        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(user_id, work_date, is_holiday)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE is_holiday=VALUES(is_holiday)
                """,
                rows,
            )
        return len(rows)

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0
