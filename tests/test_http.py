from __future__ import annotations

from datetime import date, time

import pytest

from src.attendance_dashboard.attendance_dashboard import main
from src.attendance_dashboard.attendance_dashboard.attendance.io_service import AttendanceSpreadsheetService
from src.attendance_dashboard.attendance_dashboard.attendance.service import AttendanceService
from src.attendance_dashboard.attendance_dashboard.container import Container
from src.attendance_dashboard.attendance_dashboard.payroll.service import AttendanceReportService
from src.attendance_dashboard.attendance_dashboard.schedules.service import ScheduleService
from src.attendance_dashboard.attendance_dashboard.security.auth import PageAccessPolicy, store_session_user
from src.attendance_dashboard.attendance_dashboard.security.crypto import build_field_codecs
from src.attendance_dashboard.attendance_dashboard.users.service import AuthService
from tests.fakes import InMemoryAttendance, make_record, viewer_for


class RecordingAttendance(InMemoryAttendance):
    """Counts reads so tests can tell whether a request reached the data layer."""

    def __init__(self, records=()):
        super().__init__(records)
        self.reads = 0

    def list_for_date(self, work_date):
        self.reads += 1
        return super().list_for_date(work_date)

    def list_in_range(self, **kwargs):
        self.reads += 1
        return super().list_in_range(**kwargs)


@pytest.fixture
def attendance(budi):
    return RecordingAttendance(
        [
            make_record(budi.user_id, date(2026, 1, 5), clock_in=time(8, 10), clock_out=time(17, 0)),
            make_record(budi.user_id, date(2026, 1, 20), clock_in=time(7, 55), clock_out=time(17, 0)),
        ]
    )


@pytest.fixture
def rbac_config():
    return {}


@pytest.fixture
def app(monkeypatch, users, attendance, weekly_schedules, fixed_now, rbac_config):
    container = Container(
        conn=None,
        codecs=build_field_codecs("test-auth-key"),
        page_access=PageAccessPolicy(rbac_config),
        users_repo=users,
        attendance_repo=attendance,
        schedules_repo=weekly_schedules,
        auth_service=AuthService(users),
        attendance_service=AttendanceService(attendance, users, clock=lambda: fixed_now),
        spreadsheet_service=AttendanceSpreadsheetService(attendance, users),
        report_service=AttendanceReportService(
            users, attendance, weekly_schedules, salary_calc_day=25, clock=lambda: fixed_now
        ),
        schedule_service=ScheduleService(weekly_schedules),
    )
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(main, "build_container", lambda **kwargs: container)
    return main.create_app()


@pytest.fixture
def client(app):
    return app.test_client()


def login_as(client, user):
    with client.session_transaction() as sess:
        store_session_user(sess, viewer_for(user))


def test_anonymous_request_is_401_before_any_read(client, attendance):
    resp = client.get("/api/attendance")

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Unauthorized: Please login"}
    assert attendance.reads == 0


def test_regular_user_on_admin_endpoint_is_403(client, attendance, budi):
    login_as(client, budi)

    resp = client.get("/api/attendance")

    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Unauthorized"
    assert attendance.reads == 0


@pytest.mark.parametrize("rbac_config", [{"/dashboard": ["HRD"]}])
def test_page_denied_by_rbac_config_is_403(client, attendance, budi):
    login_as(client, budi)

    resp = client.get("/api/payroll/my-summary?day=25&month=1&year=2026")

    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Forbidden: no access to /dashboard"
    assert attendance.reads == 0


@pytest.mark.parametrize("rbac_config", [{"/hrd-dashboard": ["HRD"]}])
def test_admin_passes_any_page_check(client, admin):
    login_as(client, admin)

    resp = client.get("/api/payroll/summary?day=25&month=1&year=2026")

    assert resp.status_code == 200
    assert [row["id"] for row in resp.get_json()["data"]] == [1, 2, 3]


def test_my_summary_reads_day_month_year_from_query(client, budi):
    login_as(client, budi)

    resp = client.get("/api/payroll/my-summary?day=20&month=1&year=2026")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["data"]["id"] == budi.user_id
    assert body["data"]["lateCount"] == 1
    assert body["period"] == {"startDate": "2025-12-20T00:00:00.000", "endDate": "2026-01-07T23:59:59.999"}


def test_my_summary_for_deleted_account_is_404(client):
    with client.session_transaction() as sess:
        sess["user_id"] = 42
        sess["role"] = "USER"

    resp = client.get("/api/payroll/my-summary?day=25&month=1&year=2026")

    assert resp.status_code == 404
    assert resp.get_json()["message"] == "User not found"


def test_deleting_unknown_attendance_is_404(client, admin):
    login_as(client, admin)

    resp = client.delete("/api/attendance/999")

    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Attendance record not found"}


def test_deleting_unknown_custom_schedule_is_404(client, admin):
    login_as(client, admin)

    assert client.delete("/api/schedules/custom/999").status_code == 404


def test_monthly_attendance_reads_user_from_query(client, admin, budi):
    login_as(client, admin)

    resp = client.get(f"/api/attendance/monthly?userId={budi.user_id}&month=1&year=2026")

    assert resp.status_code == 200
    assert [r["date"] for r in resp.get_json()["data"]] == ["2026-01-05", "2026-01-20"]


@pytest.mark.parametrize(
    "query",
    ["month=1&year=2026", "userId=&month=1&year=2026", "userId=abc&month=1&year=2026"],
)
def test_monthly_attendance_bad_user_id_is_400(client, admin, query):
    login_as(client, admin)

    resp = client.get(f"/api/attendance/monthly?{query}")

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert "User ID" in resp.get_json()["message"]


def test_numeric_clock_in_is_400(client, attendance, admin):
    login_as(client, admin)

    resp = client.post("/api/attendance", json={"userId": 3, "date": "2026-01-06", "clockIn": 805})

    assert resp.status_code == 400
    assert resp.get_json()["message"].startswith("Invalid time")
    assert attendance.get(3, date(2026, 1, 6)) is None


def test_upsert_then_list_for_date(client, admin):
    login_as(client, admin)

    saved = client.post("/api/attendance", json={"userId": 3, "date": "2026-01-06", "clockIn": "08:00"})
    listed = client.get("/api/attendance?date=2026-01-06")

    assert saved.get_json()["success"] is True
    by_user = {row["user"]["id"]: row["attendance"] for row in listed.get_json()["data"]}
    assert by_user[3]["clockIn"].startswith("2026-01-06T08:00")
    assert by_user[1] is None


def test_report_month_out_of_range_is_400(client, admin):
    login_as(client, admin)

    resp = client.get("/api/attendance/report?month=13&year=2026")

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "month must be between 1 and 12"


def test_report_uses_month_from_query(client, admin):
    login_as(client, admin)

    resp = client.get("/api/attendance/report?month=2&year=2026")

    assert resp.status_code == 200
    assert all(len(row["attendances"]) == 28 for row in resp.get_json()["data"])


def test_login_then_me(client, budi):
    bad = client.post("/login", json={"username": "budi", "password": "wrong"})
    good = client.post("/login", json={"username": "budi", "password": "secret"})
    me = client.get("/api/me")

    assert bad.status_code == 401
    assert good.status_code == 200
    assert me.get_json()["user"] == {"id": budi.user_id, "name": budi.name, "role": "USER"}
