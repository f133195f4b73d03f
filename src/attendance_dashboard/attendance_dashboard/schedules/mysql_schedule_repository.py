from __future__ import annotations

from datetime import date, time
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, schedule_time
from .model import CustomWorkSchedule, WorkSchedule
from .repository import ScheduleRepository


def _to_custom(r: Dict[str, Any]) -> CustomWorkSchedule:
    return CustomWorkSchedule(
        custom_schedule_id=int(r["custom_schedule_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        start_time=schedule_time(r.get("start_time")),
        end_time=schedule_time(r.get("end_time")),
        reason=r.get("reason") or "",
        created_at=r["created_at"],
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_weekly(self) -> Sequence[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT day_of_week, day_name, start_time, end_time, is_work_day
                FROM work_schedules
                ORDER BY day_of_week ASC
                """
            )
            return [
                WorkSchedule(
                    day_of_week=int(r["day_of_week"]),
                    day_name=r["day_name"],
                    start_time=schedule_time(r.get("start_time")),
                    end_time=schedule_time(r.get("end_time")),
                    is_work_day=bool(r["is_work_day"]),
                )
                for r in fetchall(cur)
            ]

    def create_weekly(self, schedules: Sequence[WorkSchedule]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT IGNORE INTO work_schedules(day_of_week, day_name, start_time, end_time, is_work_day)
                VALUES(%s,%s,%s,%s,%s)
                """,
                [(s.day_of_week, s.day_name, s.start_time, s.end_time, int(s.is_work_day)) for s in schedules],
            )

    def update_weekly(
        self,
        *,
        day_of_week: int,
        start_time: Optional[time],
        end_time: Optional[time],
        is_work_day: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_schedules
                SET start_time=%s, end_time=%s, is_work_day=%s
                WHERE day_of_week=%s
                """,
                (start_time, end_time, int(is_work_day), int(day_of_week)),
            )
            return cur.rowcount > 0

    def list_custom(self) -> Sequence[CustomWorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT custom_schedule_id, start_date, end_date, start_time, end_time, reason, created_at
                FROM custom_work_schedules
                ORDER BY start_date DESC, custom_schedule_id DESC
                """
            )
            return [_to_custom(r) for r in fetchall(cur)]

    def list_custom_overlapping(self, *, start: date, end: date) -> Sequence[CustomWorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT custom_schedule_id, start_date, end_date, start_time, end_time, reason, created_at
                FROM custom_work_schedules
                WHERE start_date <= %s AND end_date >= %s
                ORDER BY created_at DESC, custom_schedule_id DESC
                """,
                (end, start),
            )
            return [_to_custom(r) for r in fetchall(cur)]

    def create_custom(
        self,
        *,
        start_date: date,
        end_date: date,
        start_time: time,
        end_time: time,
        reason: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO custom_work_schedules(start_date, end_date, start_time, end_time, reason)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (start_date, end_date, start_time, end_time, reason),
            )
            return int(cur.lastrowid)

    def update_custom(
        self,
        *,
        custom_schedule_id: int,
        start_date: date,
        end_date: date,
        start_time: time,
        end_time: time,
        reason: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE custom_work_schedules
                SET start_date=%s, end_date=%s, start_time=%s, end_time=%s, reason=%s
                WHERE custom_schedule_id=%s
                """,
                (start_date, end_date, start_time, end_time, reason, int(custom_schedule_id)),
            )
            return cur.rowcount > 0

    def delete_custom(self, *, custom_schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM custom_work_schedules WHERE custom_schedule_id=%s", (int(custom_schedule_id),))
            return cur.rowcount > 0
