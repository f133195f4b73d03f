from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.attendance_dashboard.attendance_dashboard.attendance.service import (
    HOLIDAY_APPLIED_MESSAGE,
    HOLIDAY_CANCELLED_MESSAGE,
    AttendanceService,
)
from src.attendance_dashboard.attendance_dashboard.core.enums import AttendanceStatus
from src.attendance_dashboard.attendance_dashboard.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from tests.fakes import InMemoryAttendance, make_record, viewer_for

DAY = date(2026, 1, 5)


@pytest.fixture
def attendance():
    return InMemoryAttendance()


@pytest.fixture
def service(attendance, users, fixed_now):
    return AttendanceService(attendance, users, clock=lambda: fixed_now)


@pytest.fixture
def as_admin(admin):
    return viewer_for(admin)


def test_user_and_date_are_required(service, as_admin):
    with pytest.raises(ValidationError, match="User ID and date are required"):
        service.upsert_attendance(viewer=as_admin, form={"date": "2026-01-05"})
    with pytest.raises(ValidationError, match="User ID and date are required"):
        service.upsert_attendance(viewer=as_admin, form={"userId": "3"})


def test_regular_user_cannot_edit(service, budi):
    with pytest.raises(AuthorizationError):
        service.upsert_attendance(viewer=viewer_for(budi), form={"userId": "3", "date": "2026-01-05"})


def test_clock_times_are_set_on_record_day(service, attendance, as_admin):
    result = service.upsert_attendance(
        viewer=as_admin,
        form={"userId": "3", "date": "2026-01-05", "clockIn": "08:05", "status": "PRESENT", "notes": "ok"},
    )

    record = attendance.get(3, DAY)
    assert result == {"success": True, "id": record.attendance_id}
    assert record.clock_in == datetime(2026, 1, 5, 8, 5)
    assert record.clock_out is None
    assert record.status == AttendanceStatus.PRESENT
    assert record.notes == "ok"


def test_missing_time_field_keeps_stored_value_and_empty_string_clears(service, attendance, as_admin):
    attendance.add(make_record(3, DAY, clock_in=time(8, 0), clock_out=time(17, 0)))

    service.upsert_attendance(viewer=as_admin, form={"userId": "3", "date": "2026-01-05", "clockIn": ""})

    record = attendance.get(3, DAY)
    assert record.clock_in is None
    assert record.clock_out == datetime(2026, 1, 5, 17, 0)


def test_non_present_status_clears_both_times(service, attendance, as_admin):
    attendance.add(make_record(3, DAY, clock_in=time(8, 0), clock_out=time(17, 0)))

    service.upsert_attendance(
        viewer=as_admin,
        form={"userId": "3", "date": "2026-01-05", "status": "SICK", "clockIn": "08:00"},
    )

    record = attendance.get(3, DAY)
    assert record.status == AttendanceStatus.SICK
    assert record.clock_in is None
    assert record.clock_out is None


def test_invalid_inputs(service, as_admin):
    with pytest.raises(ValidationError):
        service.upsert_attendance(viewer=as_admin, form={"userId": "3", "date": "2026-01-05", "status": "BOLOS"})
    with pytest.raises(ValidationError):
        service.upsert_attendance(viewer=as_admin, form={"userId": "3", "date": "2026-01-05", "clockIn": "8am"})
    with pytest.raises(ValidationError):
        service.upsert_attendance(viewer=as_admin, form={"userId": "3", "date": "05/01/2026"})


def test_global_holiday_applies_to_everyone_in_one_batch(service, attendance, as_admin):
    attendance.add(make_record(3, DAY, clock_in=time(8, 0)))

    result = service.upsert_attendance(
        viewer=as_admin,
        form={"userId": "3", "date": "2026-01-05", "isHoliday": "true", "updateHolidayGlobal": "true"},
    )

    assert result == {"success": True, "message": HOLIDAY_APPLIED_MESSAGE}
    assert attendance.holiday_batches == [([1, 2, 3], DAY, True)]
    assert all(attendance.get(uid, DAY).is_holiday for uid in (1, 2, 3))
    # existing times survive the holiday flag
    assert attendance.get(3, DAY).clock_in == datetime(2026, 1, 5, 8, 0)


def test_global_holiday_can_be_cancelled(service, attendance, as_admin):
    result = service.upsert_attendance(
        viewer=as_admin,
        form={"userId": "3", "date": "2026-01-05", "isHoliday": "false", "updateHolidayGlobal": "true"},
    )

    assert result["message"] == HOLIDAY_CANCELLED_MESSAGE
    assert not any(attendance.get(uid, DAY).is_holiday for uid in (1, 2, 3))


def test_delete(service, attendance, as_admin):
    attendance_id = attendance.add(make_record(3, DAY)).attendance_id

    assert service.delete_attendance(viewer=as_admin, attendance_id=attendance_id) == {"success": True}
    assert attendance.get(3, DAY) is None
    with pytest.raises(NotFoundError):
        service.delete_attendance(viewer=as_admin, attendance_id=attendance_id)


def test_get_attendances_pairs_every_user(service, attendance, as_admin):
    attendance.add(make_record(3, date(2026, 1, 7), clock_in=time(8, 0)))

    rows = service.get_attendances(viewer=as_admin)

    assert [r["user"]["id"] for r in rows] == [1, 2, 3]
    assert rows[0]["attendance"] is None
    assert rows[2]["attendance"]["clockIn"] == "2026-01-07T08:00:00"


def test_get_attendances_for_given_date(service, attendance, as_admin):
    attendance.add(make_record(1, DAY))

    rows = service.get_attendances(viewer=as_admin, date_str="2026-01-05")

    assert rows[0]["attendance"]["date"] == "2026-01-05"


def test_monthly_attendance_returns_month_rows_in_order(service, attendance, as_admin):
    for d in (date(2026, 1, 20), date(2026, 1, 2), date(2026, 2, 1)):
        attendance.add(make_record(3, d))
    attendance.add(make_record(1, date(2026, 1, 3)))

    rows = service.get_monthly_attendance(viewer=as_admin, user_id="3", month="1", year="2026")

    assert [r["date"] for r in rows] == ["2026-01-02", "2026-01-20"]


@pytest.mark.parametrize("user_id", [None, "", "abc"])
def test_monthly_attendance_rejects_bad_user_id(service, as_admin, user_id):
    with pytest.raises(ValidationError, match="User ID"):
        service.get_monthly_attendance(viewer=as_admin, user_id=user_id, month="1", year="2026")


@pytest.mark.parametrize("clock_in", [805, 8.05, True])
def test_non_text_clock_value_is_a_validation_error(service, attendance, as_admin, clock_in):
    with pytest.raises(ValidationError, match="Invalid time"):
        service.upsert_attendance(viewer=as_admin, form={"userId": 3, "date": "2026-01-05", "clockIn": clock_in})

    assert attendance.rows == {}


def test_non_numeric_user_id_on_upsert(service, as_admin):
    with pytest.raises(ValidationError, match="User ID must be a number"):
        service.upsert_attendance(viewer=as_admin, form={"userId": "budi", "date": "2026-01-05"})
