from __future__ import annotations

from datetime import date, time
from typing import Dict, Optional, Sequence

from ..common.datetime_utils import day_of_week
from ..schedules.model import CustomWorkSchedule, WorkSchedule


class ScheduleCalendar:
    """Answers "is this a work day, and from when to when" for any date.

    A custom schedule covering a date always makes it a work day and supplies
    its times. When several overlap, the most recently created one applies.
    """

    def __init__(self, work_schedules: Sequence[WorkSchedule], custom_schedules: Sequence[CustomWorkSchedule] = ()):
        self._weekly: Dict[int, WorkSchedule] = {s.day_of_week: s for s in work_schedules}
        self._custom = sorted(
            custom_schedules,
            key=lambda c: (c.created_at, c.custom_schedule_id),
            reverse=True,
        )

    def weekly_for(self, d: date) -> Optional[WorkSchedule]:
        return self._weekly.get(day_of_week(d))

    def custom_for(self, d: date) -> Optional[CustomWorkSchedule]:
        for custom in self._custom:
            if custom.covers(d):
                return custom
        return None

    def is_work_day(self, d: date) -> bool:
        if self.custom_for(d):
            return True
        weekly = self.weekly_for(d)
        return bool(weekly and weekly.is_work_day)

    def effective_start(self, d: date) -> Optional[time]:
        custom = self.custom_for(d)
        if custom and custom.start_time:
            return custom.start_time
        weekly = self.weekly_for(d)
        return weekly.start_time if weekly else None

    def effective_end(self, d: date) -> Optional[time]:
        custom = self.custom_for(d)
        if custom and custom.end_time:
            return custom.end_time
        weekly = self.weekly_for(d)
        return weekly.end_time if weekly else None
