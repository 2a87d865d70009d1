from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.exceptions import NoDataError
from .model import AttendanceRecord

CSV_HEADERS = ("Staff ID", "Name", "Role", "Date", "Time", "Latitude", "Longitude")
MISSING_LOCATION = "N/A"


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def attendance_csv(records: Iterable[AttendanceRecord]) -> str:
    """Render attendance as CSV text.

    Only the name column is quoted; the other values are written bare, and a
    missing location becomes N/A.
    """

    lines = [",".join(CSV_HEADERS)]
    for rec in records:
        lines.append(
            ",".join(
                [
                    rec.staff_id,
                    _quote(rec.staff_name),
                    rec.staff_role,
                    rec.work_date.strftime("%Y-%m-%d"),
                    rec.check_in_time.strftime("%H:%M:%S"),
                    str(rec.location.latitude) if rec.location else MISSING_LOCATION,
                    str(rec.location.longitude) if rec.location else MISSING_LOCATION,
                ]
            )
        )

    if len(lines) == 1:
        raise NoDataError("No data to download")
    return "\n".join(lines)


def export_filename(today: date) -> str:
    return f"attendance_records_{today.strftime('%Y-%m-%d')}.csv"
