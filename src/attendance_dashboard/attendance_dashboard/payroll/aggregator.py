"""Single day-by-day walk over users x dates.

Every attendance report (payroll period summary, monthly grid) is a
:class:`~.classifiers.base.DayClassifier` fed the same :class:`~.day.DayContext`
stream, so schedule, holiday and Sunday rules live in one place.
"""
from __future__ import annotations

from datetime import date
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import iter_days
from ..users.model import User
from .calendar import ScheduleCalendar
from .classifiers.base import DayClassifier
from .day import build_day_context


def walk_attendance(
    *,
    users: Sequence[User],
    records: Iterable[AttendanceRecord],
    calendar: ScheduleCalendar,
    start: date,
    end: date,
    classifier_factory: Callable[[User], DayClassifier],
) -> List[dict]:
    """Feed each user's days in [start, end] to a fresh classifier; one result per user."""

    by_key: Dict[Tuple[int, date], AttendanceRecord] = {(r.user_id, r.work_date): r for r in records}
    days = list(iter_days(start, end))

    results: List[dict] = []
    for user in users:
        classifier = classifier_factory(user)
        for day in days:
            classifier.visit(build_day_context(day, by_key.get((user.user_id, day)), calendar))
        results.append(classifier.result())
    return results
