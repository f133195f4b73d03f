from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import day_of_week
from ..core.constants import SUNDAY
from ..schedules.model import CustomWorkSchedule
from .calendar import ScheduleCalendar


@dataclass(frozen=True)
class DayContext:
    """Everything a classifier needs to know about one user on one date."""

    day: date
    weekday: int
    record: Optional[AttendanceRecord]
    custom: Optional[CustomWorkSchedule]
    is_sunday: bool
    is_holiday: bool
    is_work_day: bool
    start_time: Optional[time]
    end_time: Optional[time]

    @property
    def scheduled_start(self) -> Optional[datetime]:
        return datetime.combine(self.day, self.start_time) if self.start_time else None


def minutes_after(actual: datetime, day: date, scheduled: time) -> int:
    """Whole minutes ``actual`` is past ``scheduled`` on ``day``; 0 when not later."""

    scheduled_at = datetime.combine(day, scheduled)
    if actual <= scheduled_at:
        return 0
    return int((actual - scheduled_at).total_seconds() // 60)


def minutes_before(actual: datetime, day: date, scheduled: time) -> int:
    """Whole minutes ``actual`` is ahead of ``scheduled`` on ``day``; 0 when not earlier."""

    scheduled_at = datetime.combine(day, scheduled)
    if actual >= scheduled_at:
        return 0
    return int((scheduled_at - actual).total_seconds() // 60)


def build_day_context(day: date, record: Optional[AttendanceRecord], calendar: ScheduleCalendar) -> DayContext:
    weekday = day_of_week(day)
    return DayContext(
        day=day,
        weekday=weekday,
        record=record,
        custom=calendar.custom_for(day),
        is_sunday=weekday == SUNDAY,
        is_holiday=bool(record and record.is_holiday),
        is_work_day=calendar.is_work_day(day),
        start_time=calendar.effective_start(day),
        end_time=calendar.effective_end(day),
    )
