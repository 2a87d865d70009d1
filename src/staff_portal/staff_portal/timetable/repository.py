from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import Timetable


class TimetableRepository(Protocol):
    def get(self, work_date: date) -> Optional[Timetable]:
        raise NotImplementedError

    def upsert(self, work_date: date, timetable: Timetable) -> None:
        """Replace the whole document stored for work_date."""

        raise NotImplementedError
