from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from werkzeug.security import generate_password_hash

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_AI_TIMEOUT_SECONDS
from .core.enums import PortalRole
from .database.connection import DBConfig, DatabaseConnection
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository
from .staff.service import AuthService, PortalCredential, StaffDirectory
from .timetable.generator import ChatCompletionTimetableGenerator, TimetableGenerator
from .timetable.mysql_timetable_repository import MySQLTimetableRepository
from .timetable.repository import TimetableRepository
from .timetable.service import TimetableService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    staff_repo: StaffRepository
    attendance_repo: AttendanceRepository
    timetables_repo: TimetableRepository

    staff_directory: StaffDirectory
    auth_service: AuthService
    attendance_service: AttendanceService
    timetable_service: TimetableService


def portal_credentials(settings: Any) -> dict[PortalRole, PortalCredential]:
    """Admin/vice-principal logins from settings; a blank password disables the login."""

    pairs = {
        PortalRole.ADMIN: ("ADMIN_EMAIL", "ADMIN_PASSWORD"),
        PortalRole.VICE_PRINCIPAL: ("VICE_PRINCIPAL_EMAIL", "VICE_PRINCIPAL_PASSWORD"),
    }
    out: dict[PortalRole, PortalCredential] = {}
    for role, (email_key, password_key) in pairs.items():
        email = getattr(settings, email_key, "") or ""
        password = getattr(settings, password_key, "") or ""
        if email and password:
            out[role] = PortalCredential(email=email, password_hash=generate_password_hash(password))
    return out


def wire_container(
    *,
    staff_repo: StaffRepository,
    attendance_repo: AttendanceRepository,
    timetables_repo: TimetableRepository,
    generator: TimetableGenerator,
    credentials: Mapping[PortalRole, PortalCredential],
    clock: Callable[[], datetime] = now_local,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    staff_directory = StaffDirectory(staff_repo, clock=clock)
    auth_service = AuthService(staff_directory, credentials)
    attendance_service = AttendanceService(attendance_repo, staff_repo, clock=clock)
    timetable_service = TimetableService(attendance_repo, staff_repo, timetables_repo, generator, clock=clock)

    return Container(
        conn=conn,
        staff_repo=staff_repo,
        attendance_repo=attendance_repo,
        timetables_repo=timetables_repo,
        staff_directory=staff_directory,
        auth_service=auth_service,
        attendance_service=attendance_service,
        timetable_service=timetable_service,
    )


def build_container(*, db_config: dict, settings: Any) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    generator = ChatCompletionTimetableGenerator(
        api_url=getattr(settings, "AI_API_URL"),
        api_key=getattr(settings, "AI_API_KEY", None),
        model=getattr(settings, "AI_MODEL"),
        timeout=getattr(settings, "AI_TIMEOUT_SECONDS", DEFAULT_AI_TIMEOUT_SECONDS),
    )

    return wire_container(
        staff_repo=MySQLStaffRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        timetables_repo=MySQLTimetableRepository(conn),
        generator=generator,
        credentials=portal_credentials(settings),
        conn=conn,
    )
