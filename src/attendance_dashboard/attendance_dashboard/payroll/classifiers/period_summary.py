from __future__ import annotations

from ...users.model import User
from ..day import DayContext, minutes_after
from .base import DayClassifier


class PeriodSummaryClassifier(DayClassifier):
    """Late/absent/permit counters over a payroll period.

    Sundays and holidays count as attended. ``totalWorkDays`` counts every
    calendar day of the window.
    """

    def __init__(self, user: User):
        self._user = user
        self.total_work_days = 0
        self.late_count = 0
        self.late_minutes = 0
        self.absent_count = 0
        self.permit_count = 0
        self.no_clock_out_count = 0

    def visit(self, ctx: DayContext) -> None:
        self.total_work_days += 1

        if ctx.is_sunday or ctx.is_holiday or not ctx.is_work_day:
            return

        record = ctx.record
        if record is None:
            self.absent_count += 1
            return

        if record.is_permit:
            self.permit_count += 1
            return

        if not record.is_present or record.clock_in is None:
            return

        scheduled = ctx.scheduled_start
        # a clock-in seconds after the start is late by 0 whole minutes
        if scheduled and record.clock_in > scheduled:
            self.late_count += 1
            self.late_minutes += minutes_after(record.clock_in, ctx.day, ctx.start_time)

        if record.clock_out is None:
            self.no_clock_out_count += 1

    def result(self) -> dict:
        return {
            **self._user.label(),
            "totalWorkDays": self.total_work_days,
            "lateCount": self.late_count,
            "lateMinutes": self.late_minutes,
            "absentCount": self.absent_count,
            "permitCount": self.permit_count,
            "noClockOutCount": self.no_clock_out_count,
        }
