from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time
from typing import Callable, Mapping, Optional

from ..common.datetime_utils import days_in_month, now_local, parse_hhmm, parse_iso_date
from ..common.validators import require_int, require_int_range
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..security.auth import require_admin
from ..users.repository import UserRepository
from ..users.service import SessionUser
from .model import AttendanceUpsert
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

HOLIDAY_APPLIED_MESSAGE = "Libur Nasional diterapkan ke semua karyawan"
HOLIDAY_CANCELLED_MESSAGE = "Libur Nasional dibatalkan untuk semua karyawan"


def _flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() == "true"


def _parse_status(value) -> Optional[AttendanceStatus]:
    v = str(value or "").strip().upper()
    if not v:
        return None
    try:
        return AttendanceStatus(v)
    except ValueError:
        raise ValidationError(f"Invalid attendance status: {value!r}")


def _clock_on(day: date, value: Optional[str]) -> Optional[datetime]:
    t: Optional[time] = parse_hhmm(value)
    return datetime.combine(day, t) if t else None


class AttendanceService:
    """Admin-side management of daily attendance rows."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._users = users
        self._clock = clock

    def get_attendances(self, *, viewer: SessionUser, date_str: Optional[str] = None) -> list[dict]:
        """Every user paired with their attendance on one day (today by default)."""

        require_admin(viewer)
        day = parse_iso_date(date_str) if date_str else self._clock().date()

        by_user = {r.user_id: r for r in self._attendance.list_for_date(day)}
        return [
            {
                "user": user.profile(),
                "attendance": by_user[user.user_id].to_dict() if user.user_id in by_user else None,
            }
            for user in self._users.list_all()
        ]

    def upsert_attendance(self, *, viewer: SessionUser, form: Mapping[str, object]) -> dict:
        """Create or update one (user, day) row, or flip the holiday flag for everyone.

        ``clockIn``/``clockOut`` are HH:MM on the record's day. A field that is
        missing keeps the stored time, an empty string clears it. Times are only
        kept for PRESENT (or status-less) rows; any other status clears both.
        """

        require_admin(viewer)

        user_id = str(form.get("userId") or "").strip()
        date_str = str(form.get("date") or "").strip()
        if not user_id or not date_str:
            raise ValidationError("User ID and date are required")

        day = parse_iso_date(date_str)
        is_holiday = _flag(form.get("isHoliday"))

        if _flag(form.get("updateHolidayGlobal")):
            user_ids = [u.user_id for u in self._users.list_all()]
            written = self._attendance.set_holiday_for_users(user_ids=user_ids, work_date=day, is_holiday=is_holiday)
            logger.info("Holiday=%s applied to %s users on %s by user %s", is_holiday, written, day, viewer.user_id)
            return {
                "success": True,
                "message": HOLIDAY_APPLIED_MESSAGE if is_holiday else HOLIDAY_CANCELLED_MESSAGE,
            }

        uid = require_int(user_id, "User ID")

        status = _parse_status(form.get("status"))
        notes = form.get("notes")
        change = AttendanceUpsert(
            user_id=uid,
            work_date=day,
            is_holiday=is_holiday,
            status=status,
            notes=str(notes) if notes else None,
        )

        if status is None or status == AttendanceStatus.PRESENT:
            clock_in_raw = form.get("clockIn")
            clock_out_raw = form.get("clockOut")
            change = replace(
                change,
                clock_in=_clock_on(day, clock_in_raw),
                clock_out=_clock_on(day, clock_out_raw),
                write_clock_in=clock_in_raw is not None,
                write_clock_out=clock_out_raw is not None,
            )
        else:
            change = replace(change, write_clock_in=True, write_clock_out=True)

        attendance_id = self._attendance.upsert(change)
        logger.info("Attendance %s upserted for user %s on %s", attendance_id, uid, day)
        return {"success": True, "id": attendance_id}

    def delete_attendance(self, *, viewer: SessionUser, attendance_id: int) -> dict:
        require_admin(viewer)

        if not self._attendance.delete(require_int(attendance_id, "Attendance ID")):
            raise NotFoundError("Attendance record not found")
        logger.info("Attendance %s deleted by user %s", attendance_id, viewer.user_id)
        return {"success": True}

    def get_monthly_attendance(self, *, viewer: SessionUser, user_id, month, year) -> list[dict]:
        """One user's rows for a calendar month, oldest first."""

        require_admin(viewer)
        uid = require_int(user_id, "User ID")
        m = require_int_range(month, "month", 1, 12)
        y = require_int_range(year, "year", 1, 9999)

        records = self._attendance.list_in_range(
            start=date(y, m, 1),
            end=date(y, m, days_in_month(y, m)),
            user_id=uid,
        )
        return [r.to_dict() for r in records]
