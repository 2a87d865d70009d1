from __future__ import annotations

from datetime import date, time

import pytest

from src.staff_portal.staff_portal.attendance.export import attendance_csv, export_filename
from src.staff_portal.staff_portal.attendance.model import AttendanceRecord, GeoLocation
from src.staff_portal.staff_portal.core.exceptions import NoDataError


def _rec(staff_id, name, role, location=None):
    return AttendanceRecord(
        record_id=f"{staff_id}-1",
        staff_id=staff_id,
        staff_name=name,
        staff_role=role,
        work_date=date(2026, 10, 19),
        check_in_time=time(8, 5, 9),
        location=location,
        selfie_url="data:image/jpeg;base64,AAAA",
    )


def test_csv_quotes_only_the_name():
    body = attendance_csv(
        [
            _rec("TEACH-123456", "Asha Rao", "teaching", GeoLocation(12.97, 77.59)),
            _rec("PEON-654321", 'Ravi "RK" Kumar', "peon"),
        ]
    )

    assert body.split("\n") == [
        "Staff ID,Name,Role,Date,Time,Latitude,Longitude",
        'TEACH-123456,"Asha Rao",teaching,2026-10-19,08:05:09,12.97,77.59',
        'PEON-654321,"Ravi ""RK"" Kumar",peon,2026-10-19,08:05:09,N/A,N/A',
    ]


def test_empty_log_has_nothing_to_download():
    with pytest.raises(NoDataError) as e:
        attendance_csv([])
    assert str(e.value) == "No data to download"


def test_export_filename():
    assert export_filename(date(2026, 1, 5)) == "attendance_records_2026-01-05.csv"
