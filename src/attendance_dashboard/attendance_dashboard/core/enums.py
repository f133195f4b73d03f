from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access checks."""

    ADMIN = "ADMIN"
    HRD = "HRD"
    USER = "USER"


class AttendanceStatus(str, Enum):
    """Attendance status as stored (encrypted) on a record.

    A record without a status is treated like PRESENT.
    """

    PRESENT = "PRESENT"
    PERMIT = "PERMIT"
    LEAVE = "LEAVE"
    SICK = "SICK"


PERMIT_STATUSES = frozenset({AttendanceStatus.PERMIT, AttendanceStatus.LEAVE, AttendanceStatus.SICK})
