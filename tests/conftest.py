from __future__ import annotations

import base64
import io
import json
from datetime import date, datetime
from typing import Optional

import pytest
from PIL import Image
from werkzeug.security import generate_password_hash

from src.staff_portal.staff_portal.attendance.model import AttendanceRecord
from src.staff_portal.staff_portal.container import wire_container
from src.staff_portal.staff_portal.core.constants import CLASS_LABELS, LUNCH_MARKER, LUNCH_SLOT, TIME_SLOTS
from src.staff_portal.staff_portal.core.enums import PortalRole
from src.staff_portal.staff_portal.core.exceptions import (
    AlreadyMarkedError,
    DuplicateError,
    EmailAlreadyExistsError,
)
from src.staff_portal.staff_portal.staff.model import Staff
from src.staff_portal.staff_portal.staff.service import PortalCredential
from src.staff_portal.staff_portal.timetable.model import Timetable, TimetableInput


class InMemoryStaff:
    """Dict-backed stand-in for MySQLStaffRepository (same uniqueness rules)."""

    def __init__(self):
        self._by_id: dict[str, Staff] = {}

    def get_by_id(self, staff_id: str) -> Optional[Staff]:
        return self._by_id.get(staff_id)

    def get_by_email(self, email: str) -> Optional[Staff]:
        for s in self._by_id.values():
            if s.email.lower() == email.lower():
                return s
        return None

    def create(self, staff: Staff) -> None:
        if self.get_by_email(staff.email):
            raise EmailAlreadyExistsError("An account with this email already exists.", key="email")
        if staff.staff_id in self._by_id:
            raise DuplicateError(f"Staff ID {staff.staff_id} is already taken", key="staff_id")
        self._by_id[staff.staff_id] = staff

    def list_all(self):
        return list(self._by_id.values())


class InMemoryAttendance:
    def __init__(self):
        self._rows: list[AttendanceRecord] = []

    def get_for_staff_and_date(self, staff_id: str, work_date: date) -> Optional[AttendanceRecord]:
        for r in self._rows:
            if r.staff_id == staff_id and r.work_date == work_date:
                return r
        return None

    def insert(self, record: AttendanceRecord) -> None:
        if self.get_for_staff_and_date(record.staff_id, record.work_date):
            raise AlreadyMarkedError("Attendance already marked for today")
        self._rows.insert(0, record)

    def list_all(self):
        return list(self._rows)

    def list_for_date(self, work_date: date):
        return [r for r in self._rows if r.work_date == work_date]


class InMemoryTimetables:
    """Keeps the serialized document, like the JSON column in MySQL."""

    def __init__(self):
        self.docs: dict[date, str] = {}

    def get(self, work_date: date) -> Optional[Timetable]:
        doc = self.docs.get(work_date)
        return Timetable.model_validate(json.loads(doc)) if doc else None

    def upsert(self, work_date: date, timetable: Timetable) -> None:
        self.docs[work_date] = json.dumps(timetable.to_payload())


class StubGenerator:
    def __init__(self, result=None, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.requests: list[TimetableInput] = []

    def generate(self, request: TimetableInput) -> Timetable:
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.result


def make_timetable_payload(assignments: Optional[dict] = None, classes=CLASS_LABELS) -> dict:
    """Full valid timetable; `assignments` maps (class, slot) -> (teacher, subject).

    Unassigned slots get a per-class cover teacher so nobody is double-booked.
    """

    assignments = assignments or {}
    out: dict = {}
    for class_name in classes:
        slots = {}
        for slot in TIME_SLOTS:
            if slot == LUNCH_SLOT:
                slots[slot] = {"teacher": LUNCH_MARKER, "subject": LUNCH_MARKER}
                continue
            teacher, subject = assignments.get((class_name, slot), (f"Cover {class_name}", "Study Hall"))
            slots[slot] = {"teacher": teacher, "subject": subject}
        out[class_name] = slots
    return out


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 19, 8, 15, 30)


@pytest.fixture
def selfie_url() -> str:
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), color=(200, 120, 80)).save(buf, format="JPEG")
    return "data:image/jpeg;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture
def staff_repo() -> InMemoryStaff:
    return InMemoryStaff()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def timetables_repo() -> InMemoryTimetables:
    return InMemoryTimetables()


@pytest.fixture
def generator() -> StubGenerator:
    return StubGenerator()


@pytest.fixture
def container(staff_repo, attendance_repo, timetables_repo, generator, fixed_now):
    credentials = {
        PortalRole.ADMIN: PortalCredential("admin@test.local", generate_password_hash("admin-pass")),
        PortalRole.VICE_PRINCIPAL: PortalCredential("vp@test.local", generate_password_hash("vp-pass")),
    }
    return wire_container(
        staff_repo=staff_repo,
        attendance_repo=attendance_repo,
        timetables_repo=timetables_repo,
        generator=generator,
        credentials=credentials,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def app(monkeypatch, container):
    from src.staff_portal.staff_portal.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def timetable_payload():
    """Factory fixture for make_timetable_payload."""

    return make_timetable_payload
