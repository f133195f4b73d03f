from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Optional

from ...users.model import User
from ..day import DayContext, minutes_after, minutes_before
from .base import DayClassifier


def _to_minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


class MonthlyReportClassifier(DayClassifier):
    """Per-day grid for one calendar month with late/early flags.

    Clock times are compared at minute precision. Days after ``today`` are
    never absent.
    """

    def __init__(self, user: User, *, today: date):
        self._user = user
        self._today = today
        self.attendances: Dict[int, Optional[dict]] = {}
        self.late_minutes = 0
        self.early_minutes = 0
        self.absent_days = 0

    def visit(self, ctx: DayContext) -> None:
        record = ctx.record
        if record is None:
            self.attendances[ctx.day.day] = None
            if ctx.is_work_day and not ctx.is_sunday and ctx.day <= self._today:
                self.absent_days += 1
            return

        is_late = False
        is_early = False
        if (
            not record.is_holiday
            and record.clock_in is not None
            and ctx.is_work_day
            and ctx.start_time
            and ctx.end_time
        ):
            late = minutes_after(_to_minute(record.clock_in), ctx.day, ctx.start_time)
            if late > 0:
                is_late = True
                self.late_minutes += late

            if record.clock_out is not None:
                early = minutes_before(_to_minute(record.clock_out), ctx.day, ctx.end_time)
                if early > 0:
                    is_early = True
                    self.early_minutes += early

        self.attendances[ctx.day.day] = {**record.to_dict(), "isLate": is_late, "isEarlyDeparture": is_early}

    def result(self) -> dict:
        return {
            "user": self._user.profile(),
            "attendances": self.attendances,
            "stats": {
                "lateMinutes": self.late_minutes,
                "earlyMinutes": self.early_minutes,
                "absentDays": self.absent_days,
            },
        }
