from __future__ import annotations

import json
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import StaffRole
from ..core.exceptions import DuplicateError, EmailAlreadyExistsError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Staff
from .repository import StaffRepository

_COLUMNS = """
    staff_id, full_name, email, role, registration_date,
    education_qualification, post, teaching_classes
"""


def _to_staff(row: dict) -> Staff:
    classes = row.get("teaching_classes")
    if isinstance(classes, (bytes, bytearray)):
        classes = classes.decode("utf-8")
    if isinstance(classes, str):
        classes = json.loads(classes)
    return Staff(
        staff_id=row["staff_id"],
        full_name=row["full_name"],
        email=row["email"],
        role=StaffRole(row["role"]),
        registration_date=row["registration_date"],
        education_qualification=row.get("education_qualification"),
        post=row.get("post"),
        teaching_classes=tuple(classes or ()),
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, staff_id: str) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE staff_id=%s", (staff_id,))
            row = fetchone(cur)
            return _to_staff(row) if row else None

    def get_by_email(self, email: str) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_staff(row) if row else None

    def create(self, staff: Staff) -> None:
        classes = json.dumps(list(staff.teaching_classes)) if staff.is_teaching else None
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO staff(
                        staff_id, full_name, email, role, registration_date,
                        education_qualification, post, teaching_classes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        staff.staff_id,
                        staff.full_name,
                        staff.email,
                        staff.role.value,
                        staff.registration_date,
                        staff.education_qualification,
                        staff.post,
                        classes,
                    ),
                )
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e, "uq_staff_email"):
                raise EmailAlreadyExistsError("An account with this email already exists.", key="email") from e
            if is_duplicate_key(e):
                raise DuplicateError(f"Staff ID {staff.staff_id} is already taken", key="staff_id") from e
            raise

    def list_all(self) -> Sequence[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff ORDER BY seq ASC")
            return [_to_staff(r) for r in fetchall(cur)]
