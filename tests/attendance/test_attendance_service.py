from __future__ import annotations

from dataclasses import replace
from datetime import date, time, timedelta

import pytest
from PIL import Image

from src.staff_portal.staff_portal.attendance.model import GeoLocation
from src.staff_portal.staff_portal.attendance.service import AttendanceService, parse_location
from src.staff_portal.staff_portal.common.datetime_utils import epoch_millis
from src.staff_portal.staff_portal.core.enums import StaffRole
from src.staff_portal.staff_portal.core.exceptions import AlreadyMarkedError, NotFoundError, ValidationError
from src.staff_portal.staff_portal.staff.model import Staff


@pytest.fixture
def asha(staff_repo, fixed_now) -> Staff:
    s = Staff(
        staff_id="TEACH-123456",
        full_name="Asha Rao",
        email="asha@school.in",
        role=StaffRole.TEACHING,
        registration_date=fixed_now - timedelta(days=30),
        education_qualification="M.Sc",
        post="Mathematics",
        teaching_classes=("Class 9", "Class 10"),
    )
    staff_repo.create(s)
    return s


@pytest.fixture
def svc(attendance_repo, staff_repo, fixed_now):
    return AttendanceService(attendance_repo, staff_repo, clock=lambda: fixed_now)


def test_mark_builds_record_from_directory(svc, asha, selfie_url, fixed_now):
    rec = svc.mark(asha.staff_id, selfie_url=selfie_url, location=GeoLocation(12.97, 77.59))

    assert rec.record_id == f"TEACH-123456-{epoch_millis(fixed_now)}"
    assert rec.staff_name == "Asha Rao"
    assert rec.staff_role == "teaching"
    assert rec.work_date == date(2026, 10, 19)
    assert rec.check_in_time == time(8, 15, 30)
    assert rec.to_dict()["time"] == "08:15:30"
    assert svc.has_marked_today(asha.staff_id)


def test_second_mark_same_day_returns_first_selfie(svc, asha, selfie_url, attendance_repo, fixed_now):
    svc.mark(asha.staff_id, selfie_url=selfie_url)

    with pytest.raises(AlreadyMarkedError) as e:
        svc.mark(asha.staff_id, selfie_url=selfie_url, now=fixed_now + timedelta(hours=3))

    assert e.value.record.selfie_url == selfie_url
    assert len(attendance_repo.list_all()) == 1


def test_next_day_is_a_new_record(svc, asha, selfie_url, fixed_now):
    svc.mark(asha.staff_id, selfie_url=selfie_url)
    svc.mark(asha.staff_id, selfie_url=selfie_url, now=fixed_now + timedelta(days=1))

    assert [r.work_date.day for r in svc.list_all()] == [20, 19]
    assert len(svc.list_for_date(date(2026, 10, 19))) == 1


def test_append_race_reports_stored_record(svc, asha, selfie_url, attendance_repo, fixed_now):
    first = svc.mark(asha.staff_id, selfie_url=selfie_url)
    duplicate = replace(first, record_id="other", selfie_url="data:image/png;base64,AAAA")

    with pytest.raises(AlreadyMarkedError) as e:
        svc.append(duplicate)

    assert e.value.record == first


def test_unknown_staff_cannot_mark(svc, selfie_url):
    with pytest.raises(NotFoundError):
        svc.mark("PEON-000000", selfie_url=selfie_url)


@pytest.mark.parametrize(
    "selfie,message",
    [
        ("", "No selfie was taken."),
        ("https://example.com/me.jpg", "Selfie must be an image data URL"),
        ("data:image/jpeg;base64,@@@", "Selfie is not valid base64"),
        ("data:image/png;base64,aGVsbG8gd29ybGQ=", "Selfie is not a readable image"),
    ],
)
def test_selfie_must_be_a_real_image(svc, asha, selfie, message, attendance_repo):
    with pytest.raises(ValidationError) as e:
        svc.mark(asha.staff_id, selfie_url=selfie)

    assert str(e.value) == message
    assert attendance_repo.list_all() == []


def test_parse_location():
    assert parse_location(None, "") is None
    assert parse_location("12.5", "-77.25") == GeoLocation(12.5, -77.25)

    with pytest.raises(ValidationError):
        parse_location("12.5", None)
    with pytest.raises(ValidationError):
        parse_location("91", "10")
    with pytest.raises(ValidationError):
        parse_location("10", "east")


def test_dashboard_summary(svc, asha, staff_repo, selfie_url, fixed_now):
    staff_repo.create(
        Staff(
            staff_id="PEON-654321",
            full_name="Ravi Kumar",
            email="ravi@school.in",
            role=StaffRole.PEON,
            registration_date=fixed_now,
        )
    )
    svc.mark(asha.staff_id, selfie_url=selfie_url)

    assert svc.dashboard_summary() == {"date": "2026-10-19", "total_staff": 2, "present_today": 1}


def test_oversized_image_dimensions_are_rejected(svc, asha, selfie_url, monkeypatch, attendance_repo):
    # 8x8 pixels is over twice this cap, so Pillow refuses to open it.
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

    with pytest.raises(ValidationError) as e:
        svc.mark(asha.staff_id, selfie_url=selfie_url)

    assert str(e.value) == "Selfie is not a readable image"
    assert attendance_repo.list_all() == []
