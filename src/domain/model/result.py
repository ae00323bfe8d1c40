"""Tagged result returned by the auth service.

Every service call returns either ``Ok(user)`` or ``Err(AuthError)``;
nothing is raised across the service boundary.
"""

from dataclasses import dataclass, field
from enum import Enum

from domain.model.user import User


class AuthErrorKind(str, Enum):
    VALIDATION = "validation_error"
    EMAIL_TAKEN = "email_taken"
    INVALID_CREDENTIALS = "invalid_credentials"
    NOT_FOUND = "not_found"
    STORE_UNAVAILABLE = "store_unavailable"


@dataclass(frozen=True)
class AuthError:
    kind: AuthErrorKind
    message: str
    field_errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Ok:
    user: User

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: AuthError

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> AuthErrorKind:
        return self.error.kind


AuthResult = Ok | Err
