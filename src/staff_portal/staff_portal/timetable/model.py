from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import pydantic
from pydantic import BaseModel, ConfigDict, Field, RootModel, StrictStr, model_validator

from ..core.constants import CLASS_LABELS, LUNCH_MARKER, LUNCH_SLOT, TIME_SLOTS
from ..core.exceptions import TimetableSchemaError


class PresentTeacher(BaseModel):
    """A teacher available for scheduling today (delegate input)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    full_name: str = Field(alias="fullName", min_length=1)
    subject: str = Field(min_length=1)
    classes: List[str] = Field(min_length=1)


class TimetableInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    present_teachers: List[PresentTeacher] = Field(alias="presentTeachers")
    all_classes: List[str] = Field(alias="allClasses")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class TimetableEntry(BaseModel):
    teacher: StrictStr
    subject: StrictStr

    @property
    def is_lunch(self) -> bool:
        return self.teacher == LUNCH_MARKER and self.subject == LUNCH_MARKER


class Timetable(RootModel[Dict[str, Dict[str, TimetableEntry]]]):
    """Class label -> slot label -> {teacher, subject}.

    Every class carries exactly the fixed daily slots and the lunch slot holds
    the LUNCH marker. Whether teachers are double-booked is not checked here
    (see review.find_conflicts).
    """

    @model_validator(mode="after")
    def _fixed_slots(self) -> "Timetable":
        for class_name, slots in self.root.items():
            missing = [s for s in TIME_SLOTS if s not in slots]
            if missing:
                raise ValueError(f"{class_name} is missing slots: {', '.join(missing)}")
            extra = [s for s in slots if s not in TIME_SLOTS]
            if extra:
                raise ValueError(f"{class_name} has unknown slots: {', '.join(extra)}")
            if not slots[LUNCH_SLOT].is_lunch:
                raise ValueError(f"{class_name} must have LUNCH in the {LUNCH_SLOT} slot")
        return self

    @property
    def classes(self) -> List[str]:
        return list(self.root)

    def entry(self, class_name: str, slot: str) -> Optional[TimetableEntry]:
        return self.root.get(class_name, {}).get(slot)

    def to_payload(self) -> dict:
        """Plain dict with classes and slots in canonical order."""

        ordered = [c for c in CLASS_LABELS if c in self.root] + [c for c in self.root if c not in CLASS_LABELS]
        return {
            class_name: {slot: self.root[class_name][slot].model_dump() for slot in TIME_SLOTS}
            for class_name in ordered
        }


def validate_timetable(raw: Any, classes: Sequence[str] = CLASS_LABELS) -> Timetable:
    """Validate raw JSON-like data as a Timetable covering exactly `classes`."""

    if isinstance(raw, Timetable):
        raw = raw.to_payload()
    try:
        timetable = Timetable.model_validate(raw)
    except pydantic.ValidationError as e:
        err = e.errors()[0]
        where = " / ".join(str(part) for part in err.get("loc", ()))
        raise TimetableSchemaError(f"{where}: {err['msg']}" if where else err["msg"]) from e

    missing = [c for c in classes if c not in timetable.root]
    if missing:
        raise TimetableSchemaError(f"Timetable is missing classes: {', '.join(missing)}")
    unknown = [c for c in timetable.root if c not in classes]
    if unknown:
        raise TimetableSchemaError(f"Timetable has unknown classes: {', '.join(unknown)}")
    return timetable
