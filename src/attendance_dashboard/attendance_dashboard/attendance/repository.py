from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceUpsert


class AttendanceRepository(Protocol):
    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_in_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records with start <= work_date <= end (open bounds when None), oldest first."""

        raise NotImplementedError

    def upsert(self, change: AttendanceUpsert) -> int:
        """Insert or update the (user_id, work_date) row. Returns attendance_id."""

        raise NotImplementedError

    def set_holiday_for_users(self, *, user_ids: Sequence[int], work_date: date, is_holiday: bool) -> int:
        """Upsert ``is_holiday`` for every user in one transaction.

        Either every row is written or none is.
        """

        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError
