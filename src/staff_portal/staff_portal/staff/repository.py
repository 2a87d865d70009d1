from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Staff


class StaffRepository(Protocol):
    """Repository interface for Staff.

    Note (DIP): services depend on this interface, not on a concrete database.
    Implementations must enforce unique staff_id and unique email themselves.
    """

    def get_by_id(self, staff_id: str) -> Optional[Staff]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Staff]:
        raise NotImplementedError

    def create(self, staff: Staff) -> None:
        """Insert a new staff row.

        Raises EmailAlreadyExistsError when the email is taken and
        DuplicateError(key="staff_id") when the id collides.
        """

        raise NotImplementedError

    def list_all(self) -> Sequence[Staff]:
        """All staff in registration order."""

        raise NotImplementedError
