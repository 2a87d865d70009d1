from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_staff_and_date(self, staff_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> None:
        """Insert-if-absent on (staff_id, work_date).

        Raises AlreadyMarkedError when a record for that staff and day exists.
        """

        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        """Most recent first."""

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
