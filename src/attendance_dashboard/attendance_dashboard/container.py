from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from .attendance.io_service import AttendanceSpreadsheetService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_SALARY_CALC_DAY
from .database.connection import DBConfig, DatabaseConnection
from .payroll.service import AttendanceReportService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.service import ScheduleService
from .security.auth import PageAccessPolicy
from .security.crypto import FieldCodecs, build_field_codecs
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    codecs: FieldCodecs
    page_access: PageAccessPolicy

    users_repo: MySQLUserRepository
    attendance_repo: MySQLAttendanceRepository
    schedules_repo: MySQLScheduleRepository

    auth_service: AuthService
    attendance_service: AttendanceService
    spreadsheet_service: AttendanceSpreadsheetService
    report_service: AttendanceReportService
    schedule_service: ScheduleService


def build_container(
    *,
    db_config: dict,
    auth_key: Optional[str],
    salary_calc_day: int = DEFAULT_SALARY_CALC_DAY,
    rbac_config: Optional[Mapping[str, Sequence[str]]] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    codecs = build_field_codecs(auth_key)

    users_repo = MySQLUserRepository(conn, codecs)
    attendance_repo = MySQLAttendanceRepository(conn, codecs)
    schedules_repo = MySQLScheduleRepository(conn)

    return Container(
        conn=conn,
        codecs=codecs,
        page_access=PageAccessPolicy(rbac_config),
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        schedules_repo=schedules_repo,
        auth_service=AuthService(users_repo),
        attendance_service=AttendanceService(attendance_repo, users_repo),
        spreadsheet_service=AttendanceSpreadsheetService(attendance_repo, users_repo),
        report_service=AttendanceReportService(
            users_repo,
            attendance_repo,
            schedules_repo,
            salary_calc_day=salary_calc_day,
        ),
        schedule_service=ScheduleService(schedules_repo),
    )
