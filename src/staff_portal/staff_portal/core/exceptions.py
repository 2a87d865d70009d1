class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""


class DuplicateError(DomainError):
    """Raised when a storage uniqueness constraint rejects an insert."""

    def __init__(self, message: str, *, key: str = ""):
        super().__init__(message)
        self.key = key


class EmailAlreadyExistsError(DuplicateError):
    """Raised when registering an email that is already taken."""


class AlreadyMarkedError(DuplicateError):
    """Raised when a staff member marks attendance twice on the same day.

    Carries the record stored by the first attempt so callers can show it.
    """

    def __init__(self, message: str, *, record=None):
        super().__init__(message, key="staff_date")
        self.record = record


class PreconditionError(DomainError):
    """Raised when an operation has nothing to work on."""


class NoPresentTeachersError(PreconditionError):
    """Raised when no teaching staff have marked attendance for the day."""


class NoDataError(PreconditionError):
    """Raised when an export is requested for an empty collection."""


class TimetableGenerationError(DomainError):
    """Raised when the generation delegate fails or returns a non-conforming value."""


class StorageError(DomainError):
    """Raised when the persistence layer cannot be read or written."""


class TimetableSchemaError(ValidationError):
    """Raised when a timetable document does not match the fixed class/slot layout."""
