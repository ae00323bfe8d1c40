"""Domain-level exceptions.

Adapters raise these errors so that backend-specific exceptions never
leave the adapter. The auth service catches them and turns them into
tagged results.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class DuplicateEmailError(DuplicateError):
    """A user with this email is already registered."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("Email already registered")


class ValidationError(DomainError):
    """Input violates a business validation rule."""

    def __init__(self, message: str, field_errors: dict[str, str] | None = None):
        self.field_errors = field_errors or {}
        super().__init__(message)


class StoreUnavailableError(DomainError):
    """The credential store could not be reached or failed mid-operation."""
