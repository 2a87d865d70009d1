from __future__ import annotations

from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import CLASS_LABELS
from ..core.enums import StaffRole
from ..core.exceptions import NoPresentTeachersError
from ..staff.model import Staff
from .model import PresentTeacher, TimetableInput


class TimetableRequestBuilder:
    """Turn today's teaching check-ins into the generation delegate's input.

    Pure transformation: subject comes from the staff `post`, classes from
    `teaching_classes`. Teachers lacking any of id, name, subject or classes
    (e.g. registered from the admin form without teaching details) are left out.
    """

    def __init__(self, classes: Sequence[str] = CLASS_LABELS):
        self._classes = list(classes)

    def present_teachers(
        self,
        attendance: Iterable[AttendanceRecord],
        staff: Iterable[Staff],
    ) -> list[PresentTeacher]:
        by_id = {s.staff_id: s for s in staff}
        seen: set[str] = set()
        out: list[PresentTeacher] = []

        for rec in attendance:
            if rec.staff_role != StaffRole.TEACHING.value or rec.staff_id in seen:
                continue
            member = by_id.get(rec.staff_id)
            if not member:
                continue
            if not (member.staff_id and member.full_name and member.post and member.teaching_classes):
                continue

            seen.add(member.staff_id)
            out.append(
                PresentTeacher(
                    id=member.staff_id,
                    full_name=member.full_name,
                    subject=member.post,
                    classes=list(member.teaching_classes),
                )
            )
        return out

    def build(self, attendance: Iterable[AttendanceRecord], staff: Iterable[Staff]) -> TimetableInput:
        teachers = self.present_teachers(attendance, staff)
        if not teachers:
            raise NoPresentTeachersError("No teaching staff have marked attendance yet.")
        return TimetableInput(present_teachers=teachers, all_classes=list(self._classes))
