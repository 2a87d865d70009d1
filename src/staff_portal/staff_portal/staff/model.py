from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..core.enums import StaffRole


@dataclass(frozen=True)
class Staff:
    """Domain entity: a registered staff member.

    Note: Plain data object, no DB access. Teaching details are only set for
    StaffRole.TEACHING.
    """

    staff_id: str
    full_name: str
    email: str
    role: StaffRole
    registration_date: datetime
    education_qualification: Optional[str] = None
    post: Optional[str] = None
    teaching_classes: Tuple[str, ...] = ()

    @property
    def is_teaching(self) -> bool:
        return self.role == StaffRole.TEACHING

    def to_dict(self) -> dict:
        data = {
            "id": self.staff_id,
            "fullName": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "roleLabel": self.role.label,
            "registrationDate": self.registration_date.isoformat(),
        }
        if self.is_teaching:
            data["educationQualification"] = self.education_qualification
            data["post"] = self.post
            data["teachingClasses"] = list(self.teaching_classes)
        return data
