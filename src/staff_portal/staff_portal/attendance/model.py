from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional


@dataclass(frozen=True)
class GeoLocation:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one staff member's check-in for one day.

    staff_name and staff_role are copies taken from the directory at check-in.
    """

    record_id: str
    staff_id: str
    staff_name: str
    staff_role: str
    work_date: date
    check_in_time: time
    location: Optional[GeoLocation]
    selfie_url: str

    def to_dict(self, *, include_selfie: bool = True) -> dict:
        data = {
            "id": self.record_id,
            "staffId": self.staff_id,
            "staffName": self.staff_name,
            "staffRole": self.staff_role,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "time": self.check_in_time.strftime("%H:%M:%S"),
            "location": (
                {"latitude": self.location.latitude, "longitude": self.location.longitude}
                if self.location
                else None
            ),
        }
        if include_selfie:
            data["selfieUrl"] = self.selfie_url
        return data
