from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time

import pytest

from src.attendance_dashboard.attendance_dashboard.core.exceptions import AuthorizationError, NotFoundError
from src.attendance_dashboard.attendance_dashboard.payroll.service import AttendanceReportService
from tests.fakes import InMemoryAttendance, make_record, viewer_for


@pytest.fixture
def attendance(budi):
    return InMemoryAttendance(
        [
            # Monday: 10 min late, leaves 10 min early (seconds ignored)
            make_record(budi.user_id, date(2026, 1, 5), clock_in=time(8, 10, 40), clock_out=time(16, 50, 59)),
            make_record(budi.user_id, date(2026, 1, 12), clock_in=time(7, 50), clock_out=time(17, 0)),
        ]
    )


@pytest.fixture
def service(users, attendance, weekly_schedules, fixed_now):
    return AttendanceReportService(users, attendance, weekly_schedules, salary_calc_day=25, clock=lambda: fixed_now)


def test_monthly_report_flags_late_and_early(service, admin, budi):
    rows = service.get_admin_monthly_attendance_report(viewer=viewer_for(admin), month=1, year=2026)
    row = next(r for r in rows if r["user"]["id"] == budi.user_id)

    monday = row["attendances"][5]
    assert monday["isLate"] is True
    assert monday["isEarlyDeparture"] is True
    assert row["stats"]["lateMinutes"] == 10
    assert row["stats"]["earlyMinutes"] == 10


def test_monthly_report_has_every_day_of_month(service, admin):
    rows = service.get_admin_monthly_attendance_report(viewer=viewer_for(admin), month=2, year=2026)

    assert sorted(rows[0]["attendances"]) == list(range(1, 29))


def test_monthly_report_counts_absence_up_to_today(service, admin, budi):
    rows = service.get_admin_monthly_attendance_report(viewer=viewer_for(admin), month=1, year=2026)
    row = next(r for r in rows if r["user"]["id"] == budi.user_id)

    # Jan 1, 2, 6 and 7 (today) are work days without a record; later days are in the future
    assert row["stats"]["absentDays"] == 4
    assert row["attendances"][6] is None
    assert row["attendances"][12]["isLate"] is False


def test_admin_sees_newest_accounts_first(users, attendance, weekly_schedules, fixed_now, hrd):
    joined = {1: datetime(2025, 1, 1), 2: datetime(2025, 6, 1), 3: datetime(2025, 3, 1)}
    users.users = [replace(u, created_at=joined[u.user_id]) for u in users.users]
    service = AttendanceReportService(users, attendance, weekly_schedules, clock=lambda: fixed_now)

    rows = service.get_admin_monthly_attendance_report(viewer=viewer_for(hrd), month=1, year=2026)

    assert [r["user"]["id"] for r in rows] == [2, 3, 1]


def test_accounts_without_creation_time_come_last(users, attendance, weekly_schedules, fixed_now, hrd):
    users.users = [replace(u, created_at=datetime(2025, 1, 1)) if u.user_id == 1 else u for u in users.users]
    service = AttendanceReportService(users, attendance, weekly_schedules, clock=lambda: fixed_now)

    rows = service.get_admin_monthly_attendance_report(viewer=viewer_for(hrd), month=1, year=2026)

    assert [r["user"]["id"] for r in rows] == [1, 3, 2]


def test_regular_user_sees_only_own_row(service, budi):
    rows = service.get_admin_monthly_attendance_report(viewer=viewer_for(budi), month=1, year=2026)

    assert [r["user"]["username"] for r in rows] == ["budi"]


def test_monthly_report_defaults_to_current_month(service, admin):
    rows = service.get_admin_monthly_attendance_report(viewer=viewer_for(admin))

    assert len(rows[0]["attendances"]) == 31


def test_payroll_summary_requires_admin_role(service, budi):
    with pytest.raises(AuthorizationError):
        service.get_payroll_period_attendance_summary(viewer=viewer_for(budi), reference_day=25, month=1, year=2026)


def test_payroll_summary_for_every_user(service, admin, budi):
    result = service.get_payroll_period_attendance_summary(viewer=viewer_for(admin), reference_day=25, month=1, year=2026)

    assert result["success"] is True
    assert [r["id"] for r in result["data"]] == [1, 2, 3]
    # capped at today (2026-01-07)
    assert result["period"] == {"startDate": "2025-12-25T00:00:00.000", "endDate": "2026-01-07T23:59:59.999"}

    budi_row = result["data"][2]
    assert budi_row["totalWorkDays"] == 14
    assert budi_row["lateCount"] == 1
    assert budi_row["lateMinutes"] == 10


def test_reference_day_defaults_to_configured_salary_day(service, admin):
    explicit = service.get_payroll_period_attendance_summary(viewer=viewer_for(admin), reference_day=25, month=1, year=2026)
    default = service.get_payroll_period_attendance_summary(viewer=viewer_for(admin), reference_day=None, month=1, year=2026)

    assert default == explicit


def test_my_summary_returns_single_row(service, budi):
    result = service.get_my_payroll_period_attendance_summary(viewer=viewer_for(budi), reference_day=25, month=1, year=2026)

    assert result["data"]["id"] == budi.user_id
    assert result["data"]["lateMinutes"] == 10


def test_my_summary_for_unknown_user(service, budi):
    ghost = replace(viewer_for(budi), user_id=404)
    with pytest.raises(NotFoundError):
        service.get_my_payroll_period_attendance_summary(viewer=ghost, reference_day=25, month=1, year=2026)
