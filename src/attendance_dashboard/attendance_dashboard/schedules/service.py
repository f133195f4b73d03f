from __future__ import annotations

import logging
from datetime import date, time
from typing import Optional, Sequence

from ..common.datetime_utils import parse_hhmm, parse_iso_date
from ..common.validators import require_int_range, require_non_empty
from ..core.constants import ADMIN_ROLES, DEFAULT_WORK_SCHEDULE
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import CustomWorkSchedule, WorkSchedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


def default_work_schedules() -> list[WorkSchedule]:
    return [
        WorkSchedule(
            day_of_week=day,
            day_name=name,
            start_time=parse_hhmm(start),
            end_time=parse_hhmm(end),
            is_work_day=is_work_day,
        )
        for day, name, start, end, is_work_day in DEFAULT_WORK_SCHEDULE
    ]


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role not in ADMIN_ROLES:
            raise AuthorizationError("Unauthorized")

    def get_work_schedules(self) -> Sequence[WorkSchedule]:
        """Weekly schedule; the default Mon-Fri 08:00-17:00 week is created on first use."""

        schedules = self._schedules.list_weekly()
        if schedules:
            return schedules

        logger.info("No work schedules found; creating the default week")
        self._schedules.create_weekly(default_work_schedules())
        return self._schedules.list_weekly()

    def update_work_schedule(
        self,
        *,
        current_role: Role,
        day_of_week,
        start_time: Optional[str],
        end_time: Optional[str],
        is_work_day: bool,
    ) -> None:
        self._require_admin(current_role)

        day = require_int_range(day_of_week, "dayOfWeek", 0, 6)
        start: Optional[time] = None
        end: Optional[time] = None
        if is_work_day:
            start = parse_hhmm(start_time)
            end = parse_hhmm(end_time)
            if not start or not end:
                raise ValidationError("Start and end time are required on a work day")

        if not self._schedules.update_weekly(day_of_week=day, start_time=start, end_time=end, is_work_day=bool(is_work_day)):
            raise NotFoundError(f"Work schedule for day {day} not found")
        logger.info("Work schedule updated: day=%s work_day=%s %s-%s", day, is_work_day, start, end)

    def list_custom_schedules(self) -> Sequence[CustomWorkSchedule]:
        return self._schedules.list_custom()

    @staticmethod
    def _validate_custom(
        *,
        start_date: str,
        end_date: str,
        start_time: str,
        end_time: str,
        reason: str,
    ) -> tuple[date, date, time, time, str]:
        start_d = parse_iso_date(start_date or "")
        end_d = parse_iso_date(end_date or "")
        if end_d < start_d:
            raise ValidationError("End date must not be before start date")

        start_t = parse_hhmm(start_time)
        end_t = parse_hhmm(end_time)
        if not start_t or not end_t:
            raise ValidationError("Start and end time are required")

        return start_d, end_d, start_t, end_t, require_non_empty(reason, "Reason")

    def create_custom_schedule(
        self,
        *,
        current_role: Role,
        start_date: str,
        end_date: str,
        start_time: str,
        end_time: str,
        reason: str,
    ) -> int:
        self._require_admin(current_role)
        start_d, end_d, start_t, end_t, reason = self._validate_custom(
            start_date=start_date, end_date=end_date, start_time=start_time, end_time=end_time, reason=reason
        )
        custom_id = self._schedules.create_custom(
            start_date=start_d, end_date=end_d, start_time=start_t, end_time=end_t, reason=reason
        )
        logger.info("Custom work schedule %s created for %s..%s", custom_id, start_d, end_d)
        return custom_id

    def update_custom_schedule(
        self,
        *,
        current_role: Role,
        custom_schedule_id: int,
        start_date: str,
        end_date: str,
        start_time: str,
        end_time: str,
        reason: str,
    ) -> None:
        self._require_admin(current_role)
        start_d, end_d, start_t, end_t, reason = self._validate_custom(
            start_date=start_date, end_date=end_date, start_time=start_time, end_time=end_time, reason=reason
        )
        updated = self._schedules.update_custom(
            custom_schedule_id=int(custom_schedule_id),
            start_date=start_d,
            end_date=end_d,
            start_time=start_t,
            end_time=end_t,
            reason=reason,
        )
        if not updated:
            raise NotFoundError("Custom work schedule not found")
        logger.info("Custom work schedule %s updated", custom_schedule_id)

    def delete_custom_schedule(self, *, current_role: Role, custom_schedule_id: int) -> None:
        self._require_admin(current_role)

        if not self._schedules.delete_custom(custom_schedule_id=int(custom_schedule_id)):
            raise NotFoundError("Custom work schedule not found")
        logger.info("Custom work schedule %s deleted", custom_schedule_id)
