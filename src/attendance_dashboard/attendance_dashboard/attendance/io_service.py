"""Raw clock-event spreadsheets (.xlsx) for bulk attendance entry.

A sheet holds one row per clock event: ``ID, Nama, Date, Time``. Import folds
the events of one user on one day into a single PRESENT record.
"""
from __future__ import annotations

import io
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import BinaryIO, Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from ..common.datetime_utils import days_in_month, parse_iso_date
from ..common.validators import require_int_range
from ..core.constants import CLOCK_OUT_THRESHOLD_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..security.auth import require_admin
from ..users.repository import UserRepository
from ..users.service import SessionUser
from .model import AttendanceUpsert
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

HEADERS = ["ID", "Nama", "Date", "Time"]
EXAMPLE_ROWS = [
    ["kode_id_user", "nama user", "2026-02-01", "08:05"],
    ["kode_id_user", "nama user", "2026-02-01", "17:15"],
]
COLUMN_WIDTHS = {"A": 15, "B": 30, "C": 15, "D": 10}
TEMPLATE_SHEET = "Template Import Absensi"

# Excel serial day 0
_EXCEL_EPOCH = date(1899, 12, 30)


@dataclass
class ClockEvents:
    """Minutes after midnight, split at noon."""

    clock_ins: List[int] = field(default_factory=list)
    clock_outs: List[int] = field(default_factory=list)

    def add(self, minutes: int) -> None:
        if minutes < CLOCK_OUT_THRESHOLD_MINUTES:
            self.clock_ins.append(minutes)
        else:
            self.clock_outs.append(minutes)


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _cell_user_id(value) -> Optional[int]:
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _cell_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        return _EXCEL_EPOCH + timedelta(days=int(value))
    try:
        return parse_iso_date(str(value))
    except ValidationError:
        return None


def _cell_minutes(value) -> Optional[int]:
    if isinstance(value, datetime):
        value = value.time()
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if isinstance(value, (int, float)):
        # fraction of a day
        return int(round(float(value) * 24 * 60))
    parts = str(value).strip().split(":")
    if len(parts) < 2:
        return None
    try:
        return int(parts[0]) * 60 + int(parts[1])
    except ValueError:
        return None


def _at_minutes(day: date, minutes: int) -> datetime:
    return datetime.combine(day, time.min) + timedelta(minutes=minutes)


def _workbook(rows: Sequence[Sequence[object]], sheet_name: str) -> bytes:
    df = pd.DataFrame(list(rows), columns=HEADERS)
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
        ws = writer.sheets[sheet_name]
        for column, width in COLUMN_WIDTHS.items():
            ws.column_dimensions[column].width = width
    return out.getvalue()


def group_clock_events(rows: Iterable[Sequence[object]], headers: Sequence[object]) -> Dict[Tuple[int, date], ClockEvents]:
    """Fold raw rows into per-(user, day) clock events; unreadable rows are skipped."""

    names = [str(h).strip().lower() if not _is_blank(h) else "" for h in headers]
    try:
        id_idx, date_idx, time_idx = names.index("id"), names.index("date"), names.index("time")
    except ValueError:
        raise ValidationError("Required columns (ID, Date, Time) not found")

    grouped: Dict[Tuple[int, date], ClockEvents] = defaultdict(ClockEvents)
    for row in rows:
        if len(row) <= max(id_idx, date_idx, time_idx):
            continue
        raw_id, raw_date, raw_time = row[id_idx], row[date_idx], row[time_idx]
        if _is_blank(raw_id) or _is_blank(raw_date) or _is_blank(raw_time):
            continue

        user_id = _cell_user_id(raw_id)
        day = _cell_date(raw_date)
        minutes = _cell_minutes(raw_time)
        if user_id is None or day is None or minutes is None:
            continue

        grouped[(user_id, day)].add(minutes)
    return dict(grouped)


class AttendanceSpreadsheetService:
    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def build_template(self, *, viewer: SessionUser) -> bytes:
        require_admin(viewer)

        user_rows = [[u.user_id, u.name or "-", "", ""] for u in self._users.list_all()]
        return _workbook(EXAMPLE_ROWS + user_rows, TEMPLATE_SHEET)

    def import_raw(self, *, viewer: SessionUser, stream: Optional[BinaryIO]) -> int:
        """Upsert one PRESENT record per (user, day) found in the sheet.

        The earliest morning event is the clock-in and the latest afternoon
        event the clock-out. Rows for unknown users are ignored. Returns the
        number of records written.
        """

        require_admin(viewer)
        if stream is None:
            raise ValidationError("Missing file")

        try:
            df = pd.read_excel(stream, sheet_name=0, header=None, dtype=object, engine="openpyxl")
        except Exception as e:
            raise ValidationError(f"Could not read spreadsheet: {e}")

        data = df.values.tolist()
        if len(data) < 2:
            raise ValidationError("File empty or invalid")

        grouped = group_clock_events(data[1:], data[0])
        known = {u.user_id for u in self._users.list_all()}

        count = 0
        for (user_id, day), events in sorted(grouped.items(), key=lambda kv: (kv[0][0], kv[0][1])):
            if user_id not in known:
                logger.warning("Skipping imported rows for unknown user id %s", user_id)
                continue

            self._attendance.upsert(
                AttendanceUpsert(
                    user_id=user_id,
                    work_date=day,
                    is_holiday=False,
                    status=AttendanceStatus.PRESENT,
                    clock_in=_at_minutes(day, min(events.clock_ins)) if events.clock_ins else None,
                    clock_out=_at_minutes(day, max(events.clock_outs)) if events.clock_outs else None,
                    write_notes=False,
                    write_clock_in=True,
                    write_clock_out=True,
                )
            )
            count += 1

        logger.info("Imported %s attendance records by user %s", count, viewer.user_id)
        return count

    def export_raw(self, *, viewer: SessionUser, month=None, year=None) -> bytes:
        """One row per stored clock-in/out event, for a month or for everything."""

        require_admin(viewer)

        start: Optional[date] = None
        end: Optional[date] = None
        sheet_name = "All Attendance"
        if month and year:
            m = require_int_range(month, "month", 1, 12)
            y = require_int_range(year, "year", 1, 9999)
            start, end = date(y, m, 1), date(y, m, days_in_month(y, m))
            sheet_name = f"Attendance {m}-{y}"

        names = {u.user_id: u.name for u in self._users.list_all()}
        rows: List[List[object]] = []
        for record in self._attendance.list_in_range(start=start, end=end):
            name = names.get(record.user_id) or "-"
            day = record.work_date.isoformat()
            for moment in (record.clock_in, record.clock_out):
                if moment:
                    rows.append([record.user_id, name, day, moment.strftime("%H:%M")])

        return _workbook(rows, sheet_name)
