from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.constants import CLASS_LABELS, TIME_SLOTS
from ..core.enums import PortalRole
from ..core.exceptions import AuthorizationError, NotFoundError
from ..staff.repository import StaffRepository
from .builder import TimetableRequestBuilder
from .generator import TimetableGenerator
from .model import PresentTeacher, Timetable, TimetableInput, validate_timetable
from .repository import TimetableRepository
from .review import find_conflicts


class TimetableService:
    """Use case: build the request, delegate generation, publish and read timetables."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        staff: StaffRepository,
        timetables: TimetableRepository,
        generator: TimetableGenerator,
        *,
        builder: Optional[TimetableRequestBuilder] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._staff = staff
        self._timetables = timetables
        self._generator = generator
        self._builder = builder or TimetableRequestBuilder()
        self._clock = clock

    def _day(self, work_date: Optional[date]) -> date:
        return work_date or self._clock().date()

    @staticmethod
    def _require_vice_principal(current_role: PortalRole) -> None:
        if current_role != PortalRole.VICE_PRINCIPAL:
            raise AuthorizationError("Only the vice-principal can manage timetables")

    def present_teachers(self, work_date: Optional[date] = None) -> list[PresentTeacher]:
        day = self._day(work_date)
        return self._builder.present_teachers(self._attendance.list_for_date(day), self._staff.list_all())

    def build_request(self, work_date: Optional[date] = None) -> TimetableInput:
        day = self._day(work_date)
        return self._builder.build(self._attendance.list_for_date(day), self._staff.list_all())

    def generate(self, *, current_role: PortalRole, work_date: Optional[date] = None) -> Timetable:
        """Ask the delegate for a candidate; nothing is stored until publish()."""

        self._require_vice_principal(current_role)
        return self._generator.generate(self.build_request(work_date))

    def review(self, timetable: Timetable) -> list[dict]:
        return find_conflicts(timetable)

    def publish(
        self,
        *,
        current_role: PortalRole,
        timetable: Timetable | dict[str, Any],
        work_date: Optional[date] = None,
    ) -> Timetable:
        self._require_vice_principal(current_role)
        accepted = validate_timetable(timetable, CLASS_LABELS)
        self._timetables.upsert(self._day(work_date), accepted)
        return accepted

    def get(self, work_date: Optional[date] = None) -> Timetable:
        day = self._day(work_date)
        timetable = self._timetables.get(day)
        if timetable is None:
            raise NotFoundError(f"No timetable has been published for {day.strftime('%Y-%m-%d')}")
        return timetable

    def is_published(self, work_date: Optional[date] = None) -> bool:
        return self._timetables.get(self._day(work_date)) is not None

    def schedule_for_teacher(self, teacher_name: str, work_date: Optional[date] = None) -> list[dict]:
        """Slots in the published timetable where `teacher` equals teacher_name."""

        timetable = self.get(work_date)
        wanted = (teacher_name or "").strip()
        if not wanted:
            return []
        rows: list[dict] = []
        for slot in TIME_SLOTS:
            for class_name in timetable.classes:
                entry = timetable.entry(class_name, slot)
                if entry and entry.teacher.strip() == wanted:
                    rows.append({"time": slot, "class": class_name, "subject": entry.subject})
        return rows
