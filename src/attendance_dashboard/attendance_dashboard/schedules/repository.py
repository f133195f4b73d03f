from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import CustomWorkSchedule, WorkSchedule


class ScheduleRepository(Protocol):
    def list_weekly(self) -> Sequence[WorkSchedule]:
        """Weekly rows ordered by day_of_week."""

        raise NotImplementedError

    def create_weekly(self, schedules: Sequence[WorkSchedule]) -> None:
        raise NotImplementedError

    def update_weekly(
        self,
        *,
        day_of_week: int,
        start_time: Optional[time],
        end_time: Optional[time],
        is_work_day: bool,
    ) -> bool:
        raise NotImplementedError

    def list_custom(self) -> Sequence[CustomWorkSchedule]:
        raise NotImplementedError

    def list_custom_overlapping(self, *, start: date, end: date) -> Sequence[CustomWorkSchedule]:
        """Custom schedules whose range intersects [start, end]."""

        raise NotImplementedError

    def create_custom(
        self,
        *,
        start_date: date,
        end_date: date,
        start_time: time,
        end_time: time,
        reason: str,
    ) -> int:
        raise NotImplementedError

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
        raise NotImplementedError

    def delete_custom(self, *, custom_schedule_id: int) -> bool:
        raise NotImplementedError
