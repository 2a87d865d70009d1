from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import AlreadyMarkedError, DuplicateError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, normalize_mysql_time
from .model import AttendanceRecord, GeoLocation
from .repository import AttendanceRepository

_SELECT = """
    SELECT record_id, staff_id, staff_name, staff_role, work_date, check_in_time,
           latitude, longitude, selfie_url
    FROM attendance_records
"""


def _to_record(r: dict) -> AttendanceRecord:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = GeoLocation(latitude=float(r["latitude"]), longitude=float(r["longitude"]))
    return AttendanceRecord(
        record_id=r["record_id"],
        staff_id=r["staff_id"],
        staff_name=r["staff_name"],
        staff_role=r["staff_role"],
        work_date=r["work_date"],
        check_in_time=normalize_mysql_time(r["check_in_time"]),
        location=location,
        selfie_url=r["selfie_url"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_staff_and_date(self, staff_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE staff_id=%s AND work_date=%s", (staff_id, work_date))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def insert(self, record: AttendanceRecord) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        record_id, staff_id, staff_name, staff_role, work_date, check_in_time,
                        latitude, longitude, selfie_url
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.record_id,
                        record.staff_id,
                        record.staff_name,
                        record.staff_role,
                        record.work_date,
                        record.check_in_time,
                        record.location.latitude if record.location else None,
                        record.location.longitude if record.location else None,
                        record.selfie_url,
                    ),
                )
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e, "uq_attendance_staff_date"):
                raise AlreadyMarkedError("Attendance already marked for today") from e
            if is_duplicate_key(e):
                raise DuplicateError(f"Attendance record {record.record_id} already exists", key="record_id") from e
            raise

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY seq DESC")
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE work_date=%s ORDER BY seq DESC", (work_date,))
            return [_to_record(r) for r in fetchall(cur)]
