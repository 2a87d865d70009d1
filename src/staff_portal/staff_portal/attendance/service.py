from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import epoch_millis, now_local
from ..common.validators import require_coordinate
from ..core.exceptions import AlreadyMarkedError, NotFoundError, ValidationError
from ..staff.repository import StaffRepository
from .model import AttendanceRecord, GeoLocation
from .repository import AttendanceRepository
from .selfie import validate_selfie


def parse_location(latitude, longitude) -> Optional[GeoLocation]:
    """Build a GeoLocation from raw inputs; both missing means no fix."""

    blank = (None, "")
    if latitude in blank and longitude in blank:
        return None
    if latitude in blank or longitude in blank:
        raise ValidationError("Location needs both latitude and longitude")
    return GeoLocation(
        latitude=require_coordinate(latitude, "Latitude", 90),
        longitude=require_coordinate(longitude, "Longitude", 180),
    )


class AttendanceService:
    """Use case: daily check-in with location and selfie evidence."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        staff: StaffRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._staff = staff
        self._clock = clock

    def today(self) -> date:
        return self._clock().date()

    def has_marked_today(self, staff_id: str, today: Optional[date] = None) -> bool:
        return self.get_today_record(staff_id, today) is not None

    def get_today_record(self, staff_id: str, today: Optional[date] = None) -> Optional[AttendanceRecord]:
        today = today or self.today()
        return self._attendance.get_for_staff_and_date(staff_id, today)

    def append(self, record: AttendanceRecord) -> None:
        """Store a record; a second one for the same staff and day is rejected.

        The rejection carries the record that was stored first.
        """

        try:
            self._attendance.insert(record)
        except AlreadyMarkedError as e:
            existing = self._attendance.get_for_staff_and_date(record.staff_id, record.work_date)
            raise AlreadyMarkedError(str(e), record=existing) from e

    def mark(
        self,
        staff_id: str,
        *,
        selfie_url: str,
        location: Optional[GeoLocation] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()

        staff = self._staff.get_by_id(staff_id)
        if not staff:
            raise NotFoundError("Staff member does not exist")

        existing = self._attendance.get_for_staff_and_date(staff.staff_id, today)
        if existing:
            raise AlreadyMarkedError("Attendance already marked for today", record=existing)

        record = AttendanceRecord(
            record_id=f"{staff.staff_id}-{epoch_millis(now)}",
            staff_id=staff.staff_id,
            staff_name=staff.full_name,
            staff_role=staff.role.value,
            work_date=today,
            check_in_time=now.time().replace(microsecond=0),
            location=location,
            selfie_url=validate_selfie(selfie_url),
        )
        self.append(record)
        return record

    def list_all(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all()

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_date(work_date)

    def dashboard_summary(self, today: Optional[date] = None) -> dict:
        today = today or self.today()
        return {
            "date": today.strftime("%Y-%m-%d"),
            "total_staff": len(self._staff.list_all()),
            "present_today": len(self._attendance.list_for_date(today)),
        }
