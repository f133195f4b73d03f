from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterator

from ..common.datetime_utils import end_of_day, iter_days, rolled_date, start_of_day
from ..common.validators import require_int_range


@dataclass(frozen=True)
class PayrollPeriod:
    """Inclusive window [start, end] between two salary calculation days."""

    start: datetime
    end: datetime

    @property
    def start_date(self) -> date:
        return self.start.date()

    @property
    def end_date(self) -> date:
        return self.end.date()

    def days(self) -> Iterator[date]:
        return iter_days(self.start_date, self.end_date)

    def as_dict(self) -> dict:
        return {
            "startDate": self.start.isoformat(timespec="milliseconds"),
            "endDate": self.end.isoformat(timespec="milliseconds"),
        }


def resolve_payroll_period(reference_day, month, year, *, now: datetime) -> PayrollPeriod:
    """Period paid in ``month``/``year``: reference day of the previous month
    through the day before the reference day of this month.

    e.g. (25, 1, 2026) -> 2025-12-25 00:00 .. 2026-01-24 23:59:59.999.
    Days roll over month ends, and an end later than today is cut to today.
    """

    day = require_int_range(reference_day, "Salary calculation day", 1, 31)
    m = require_int_range(month, "month", 1, 12)
    y = require_int_range(year, "year", 2, 9999)

    if m == 1:
        start_d = rolled_date(y - 1, 12, day)
    else:
        start_d = rolled_date(y, m - 1, day)
    end_d = rolled_date(y, m, day - 1)

    start = start_of_day(start_d)
    end = end_of_day(end_d)

    cap = end_of_day(now.date())
    if end > cap:
        end = cap

    return PayrollPeriod(start=start, end=end)
