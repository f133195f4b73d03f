from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_hhmm


@dataclass(frozen=True)
class WorkSchedule:
    """Standard weekly schedule row (0 = Sunday ... 6 = Saturday)."""

    day_of_week: int
    day_name: str
    start_time: Optional[time]
    end_time: Optional[time]
    is_work_day: bool

    def to_dict(self) -> dict:
        return {
            "dayOfWeek": self.day_of_week,
            "dayName": self.day_name,
            "startTime": format_hhmm(self.start_time),
            "endTime": format_hhmm(self.end_time),
            "isWorkDay": self.is_work_day,
        }


@dataclass(frozen=True)
class CustomWorkSchedule:
    """Date-range override: every covered date is a work day with these times."""

    custom_schedule_id: int
    start_date: date
    end_date: date
    start_time: Optional[time]
    end_time: Optional[time]
    reason: str
    created_at: datetime

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def to_dict(self) -> dict:
        return {
            "id": self.custom_schedule_id,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "startTime": format_hhmm(self.start_time),
            "endTime": format_hhmm(self.end_time),
            "reason": self.reason,
            "createdAt": self.created_at.isoformat(),
        }
