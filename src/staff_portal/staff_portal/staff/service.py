from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Sequence

from werkzeug.security import check_password_hash

from ..common.datetime_utils import epoch_millis, now_local
from ..common.validators import require_non_empty
from ..core.constants import STAFF_ID_MAX_ATTEMPTS, STAFF_ID_SUFFIX_DIGITS
from ..core.enums import PortalRole, StaffRole
from ..core.exceptions import AuthenticationError, DuplicateError, NotFoundError, ValidationError
from .forms import StaffRegistration, parse_registration
from .model import Staff
from .repository import StaffRepository


def generate_staff_id(role: StaffRole, now: datetime) -> str:
    """`TEACH-123456`: role prefix plus the last six digits of the epoch-millis clock."""

    suffix = str(epoch_millis(now))[-STAFF_ID_SUFFIX_DIGITS:]
    return f"{role.id_prefix}-{suffix}"


def _random_staff_id(role: StaffRole) -> str:
    suffix = f"{secrets.randbelow(10 ** STAFF_ID_SUFFIX_DIGITS):0{STAFF_ID_SUFFIX_DIGITS}d}"
    return f"{role.id_prefix}-{suffix}"


class StaffDirectory:
    """Use case: register and look up staff."""

    def __init__(
        self,
        staff: StaffRepository,
        *,
        clock: Callable[[], datetime] = now_local,
        max_id_attempts: int = STAFF_ID_MAX_ATTEMPTS,
    ):
        self._staff = staff
        self._clock = clock
        self._max_id_attempts = int(max_id_attempts)

    def register(
        self,
        fields: Mapping[str, Any] | StaffRegistration,
        *,
        require_teaching_details: bool = True,
    ) -> str:
        """Create a staff record and return its issued id.

        The self-registration form insists on teaching details for teaching
        staff; the admin dashboard form does not collect them. Email
        uniqueness is enforced by the repository.

        If the timestamp-derived id is already taken, a random suffix is tried
        instead, up to ``max_id_attempts`` ids in total.
        """

        form = fields if isinstance(fields, StaffRegistration) else parse_registration(fields)
        teaching = form.role == StaffRole.TEACHING
        if teaching and require_teaching_details and not form.has_teaching_details:
            raise ValidationError("Education, post, and classes are required for teaching staff")

        now = self._clock()
        staff_id = generate_staff_id(form.role, now)
        for _ in range(self._max_id_attempts):
            staff = Staff(
                staff_id=staff_id,
                full_name=form.full_name,
                email=form.email,
                role=form.role,
                registration_date=now,
                education_qualification=form.education_qualification if teaching else None,
                post=form.post if teaching else None,
                teaching_classes=tuple(form.teaching_classes) if teaching else (),
            )
            try:
                self._staff.create(staff)
                return staff_id
            except DuplicateError as e:
                if e.key != "staff_id":
                    raise
                staff_id = _random_staff_id(form.role)

        raise DuplicateError("Could not issue a unique Staff ID. Please try again.", key="staff_id")

    def find_by_id(self, staff_id: str) -> Staff:
        staff_id = require_non_empty(staff_id, "Staff ID").upper()
        staff = self._staff.get_by_id(staff_id)
        if not staff:
            raise NotFoundError(f"Staff {staff_id} not found")
        return staff

    def list_all(self) -> Sequence[Staff]:
        return self._staff.list_all()


@dataclass(frozen=True)
class PortalCredential:
    email: str
    password_hash: str


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    role: PortalRole
    display_name: str
    staff_id: Optional[str] = None


class AuthService:
    """Use case: log into the portal.

    Staff log in with their issued id; the admin and vice-principal log in with
    configured credentials.
    """

    def __init__(self, directory: StaffDirectory, credentials: Mapping[PortalRole, PortalCredential]):
        self._directory = directory
        self._credentials = dict(credentials)

    def login_staff(self, staff_id: str) -> SessionUser:
        try:
            staff = self._directory.find_by_id(staff_id)
        except (NotFoundError, ValidationError):
            raise AuthenticationError("Invalid Staff ID. Please check and try again.")
        return SessionUser(role=PortalRole.STAFF, display_name=staff.full_name, staff_id=staff.staff_id)

    def login_portal(self, role: PortalRole, email: str, password: str) -> SessionUser:
        cred = self._credentials.get(role)
        email = (email or "").strip().lower()
        if not cred or not email or email != cred.email.lower():
            raise AuthenticationError("Invalid credentials. Please try again.")

        try:
            ok = check_password_hash(cred.password_hash, password or "")
        except ValueError:
            # e.g. unset or malformed hash in settings
            ok = False
        if not ok:
            raise AuthenticationError("Invalid credentials. Please try again.")

        name = "Administrator" if role == PortalRole.ADMIN else "Vice Principal"
        return SessionUser(role=role, display_name=name)
