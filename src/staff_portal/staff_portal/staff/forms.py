from __future__ import annotations

from typing import Any, List, Mapping, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ..core.constants import CLASS_LABELS, MIN_FULL_NAME_LENGTH, SCHOOL_CLASSES
from ..core.enums import StaffRole
from ..core.exceptions import ValidationError

_CLASS_LABEL_BY_ID = dict(SCHOOL_CLASSES)

_FIELD_LABELS = {
    "fullName": "Full name",
    "email": "Email",
    "role": "Role",
    "educationQualification": "Education qualification",
    "post": "Post",
    "teachingClasses": "Teaching classes",
}


def normalize_class(value: str) -> str:
    """Map a class id ("11-science") or label ("11th Science") to its label."""

    value = (value or "").strip()
    if value in _CLASS_LABEL_BY_ID:
        return _CLASS_LABEL_BY_ID[value]
    for label in CLASS_LABELS:
        if label.lower() == value.lower():
            return label
    raise ValueError(f"unknown class {value!r}")


class StaffRegistration(BaseModel):
    """Registration form fields (self-registration and admin dashboard)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    full_name: str = Field(alias="fullName", min_length=MIN_FULL_NAME_LENGTH)
    email: EmailStr
    role: StaffRole
    education_qualification: Optional[str] = Field(default=None, alias="educationQualification")
    post: Optional[str] = None
    teaching_classes: List[str] = Field(default_factory=list, alias="teachingClasses")

    @field_validator("education_qualification", "post", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("teaching_classes", mode="before")
    @classmethod
    def _split_classes(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [part for part in v.split(",") if part.strip()]
        return v

    @field_validator("teaching_classes")
    @classmethod
    def _known_classes(cls, v: List[str]) -> List[str]:
        labels = {normalize_class(item) for item in v}
        return [label for label in CLASS_LABELS if label in labels]

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.lower()

    @property
    def has_teaching_details(self) -> bool:
        return bool(self.education_qualification and self.post and self.teaching_classes)


def parse_registration(data: Mapping[str, Any]) -> StaffRegistration:
    """Validate raw form/JSON data, raising the domain ValidationError."""

    try:
        return StaffRegistration.model_validate(dict(data))
    except pydantic.ValidationError as e:
        err = e.errors()[0]
        field = str(err["loc"][0]) if err.get("loc") else ""
        label = _FIELD_LABELS.get(field, field or "Form")
        raise ValidationError(f"{label}: {err['msg']}") from e
