from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}")


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    """Parse HH:MM (seconds tolerated). Empty -> None.

    Anything else (a bare number from a JSON body, say) is a ValidationError.
    """
    v = "" if value is None else str(value).strip()
    if not v:
        return None
    parts = v.split(":")
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        return time(hour=hours, minute=minutes)
    except (IndexError, ValueError):
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def format_hhmm(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value else None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min)


def end_of_day(d: date) -> datetime:
    """23:59:59.999, millisecond precision like the stored period bounds."""
    return datetime.combine(d, time(23, 59, 59, 999000))


def rolled_date(year: int, month: int, day: int) -> date:
    """Build a date letting month and day overflow into neighbours.

    rolled_date(2026, 3, 0) is the last day of February and
    rolled_date(2026, 2, 31) is 3 March, the way calendar arithmetic rolls over.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar day in [start, end]; nothing when start > end."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def day_of_week(d: date) -> int:
    """Weekday in work-schedule numbering (0 = Sunday ... 6 = Saturday)."""
    return (d.weekday() + 1) % 7
