from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import days_in_month, now_local
from ..common.validators import require_int_range
from ..core.constants import DEFAULT_SALARY_CALC_DAY
from ..core.exceptions import NotFoundError
from ..schedules.repository import ScheduleRepository
from ..security.auth import is_admin_role, require_admin
from ..users.model import User
from ..users.repository import UserRepository
from ..users.service import SessionUser
from .aggregator import walk_attendance
from .calendar import ScheduleCalendar
from .classifiers.monthly_report import MonthlyReportClassifier
from .classifiers.period_summary import PeriodSummaryClassifier
from .period import PayrollPeriod, resolve_payroll_period

logger = logging.getLogger(__name__)


def _newest_first(users: Sequence[User]) -> list[User]:
    # Accounts without a creation time go last.
    return sorted(users, key=lambda u: (u.created_at or datetime.min, u.user_id), reverse=True)


class AttendanceReportService:
    """Read-only attendance reports: payroll period summaries and the monthly grid.

    Each call loads users, records and schedules for its window once and then
    walks the days in memory.
    """

    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        schedules: ScheduleRepository,
        *,
        salary_calc_day: int = DEFAULT_SALARY_CALC_DAY,
        clock: Callable[[], datetime] = now_local,
    ):
        self._users = users
        self._attendance = attendance
        self._schedules = schedules
        self._salary_calc_day = int(salary_calc_day)
        self._clock = clock

    def _calendar(self, start: date, end: date) -> ScheduleCalendar:
        return ScheduleCalendar(
            self._schedules.list_weekly(),
            self._schedules.list_custom_overlapping(start=start, end=end),
        )

    def _period(self, reference_day, month, year) -> PayrollPeriod:
        if reference_day in (None, ""):
            reference_day = self._salary_calc_day
        return resolve_payroll_period(reference_day, month, year, now=self._clock())

    def _summaries(self, users: Sequence[User], period: PayrollPeriod, *, user_id: Optional[int] = None) -> list[dict]:
        start, end = period.start_date, period.end_date
        records = self._attendance.list_in_range(start=start, end=end, user_id=user_id)
        return walk_attendance(
            users=users,
            records=records,
            calendar=self._calendar(start, end),
            start=start,
            end=end,
            classifier_factory=PeriodSummaryClassifier,
        )

    def get_payroll_period_attendance_summary(self, *, viewer: SessionUser, reference_day, month, year) -> dict:
        """Every user's counters for the payroll period ending in ``month``/``year``."""

        require_admin(viewer)
        period = self._period(reference_day, month, year)
        users = sorted(self._users.list_all(), key=lambda u: u.user_id)

        data = self._summaries(users, period)
        logger.info("Payroll summary %s..%s for %s users", period.start_date, period.end_date, len(users))
        return {"success": True, "data": data, "period": period.as_dict()}

    def get_my_payroll_period_attendance_summary(self, *, viewer: SessionUser, reference_day, month, year) -> dict:
        period = self._period(reference_day, month, year)

        user = self._users.get_by_id(viewer.user_id)
        if not user:
            raise NotFoundError("User not found")

        data = self._summaries([user], period, user_id=user.user_id)
        return {"success": True, "data": data[0], "period": period.as_dict()}

    def get_admin_monthly_attendance_report(self, *, viewer: SessionUser, month=None, year=None) -> list[dict]:
        """Day-by-day grid for a calendar month.

        Admins get every user; anyone else only their own row.
        """

        now = self._clock()
        m = require_int_range(month if month not in (None, "") else now.month, "month", 1, 12)
        y = require_int_range(year if year not in (None, "") else now.year, "year", 1, 9999)
        start, end = date(y, m, 1), date(y, m, days_in_month(y, m))

        if is_admin_role(viewer.role):
            users = _newest_first(self._users.list_all())
            user_id = None
        else:
            user = self._users.get_by_id(viewer.user_id)
            users = [user] if user else []
            user_id = viewer.user_id

        records = self._attendance.list_in_range(start=start, end=end, user_id=user_id)
        today = now.date()
        return walk_attendance(
            users=users,
            records=records,
            calendar=self._calendar(start, end),
            start=start,
            end=end,
            classifier_factory=lambda u: MonthlyReportClassifier(u, today=today),
        )
