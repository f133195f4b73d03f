from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import PERMIT_STATUSES, AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (user, day), already decrypted."""

    attendance_id: int
    user_id: int
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    status: Optional[AttendanceStatus]
    is_holiday: bool = False
    notes: Optional[str] = None

    @property
    def is_present(self) -> bool:
        """PRESENT, or no status at all (rows created before statuses existed)."""
        return self.status is None or self.status == AttendanceStatus.PRESENT

    @property
    def is_permit(self) -> bool:
        return self.status in PERMIT_STATUSES

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "clockIn": self.clock_in.isoformat() if self.clock_in else None,
            "clockOut": self.clock_out.isoformat() if self.clock_out else None,
            "status": self.status.value if self.status else None,
            "isHoliday": self.is_holiday,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class AttendanceUpsert:
    """Values written by an upsert keyed on (user_id, work_date).

    On update, a column whose ``write_*`` flag is False keeps its stored value;
    on insert it starts empty.
    """

    user_id: int
    work_date: date
    is_holiday: bool = False
    status: Optional[AttendanceStatus] = None
    notes: Optional[str] = None
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    write_status: bool = True
    write_notes: bool = True
    write_clock_in: bool = False
    write_clock_out: bool = False
