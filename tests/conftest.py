from __future__ import annotations

from datetime import datetime

import pytest

from src.attendance_dashboard.attendance_dashboard.core.enums import Role
from src.attendance_dashboard.attendance_dashboard.schedules.service import default_work_schedules
from src.attendance_dashboard.attendance_dashboard.users.model import User
from tests.fakes import InMemorySchedules, InMemoryUsers, make_user


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2026, 1, 7, 10, 30)


@pytest.fixture
def admin() -> User:
    return make_user(1, "admin", Role.ADMIN, name="Admin Demo")


@pytest.fixture
def hrd() -> User:
    return make_user(2, "hrd", Role.HRD, name="HRD Demo")


@pytest.fixture
def budi() -> User:
    return make_user(3, "budi", Role.USER, name="Budi Santoso")


@pytest.fixture
def users(admin, hrd, budi) -> InMemoryUsers:
    return InMemoryUsers([budi, admin, hrd])


@pytest.fixture
def weekly_schedules() -> InMemorySchedules:
    return InMemorySchedules(weekly=default_work_schedules())
