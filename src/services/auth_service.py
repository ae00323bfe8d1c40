"""Auth service — registration and authentication business logic.

Pure business logic with no HTTP dependencies. Every operation returns a
tagged AuthResult; domain errors raised by the store are caught here and
never cross the service boundary.
"""

import logging

import email_validator

from domain.model.errors import (
    DuplicateEmailError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from domain.model.result import AuthError, AuthErrorKind, AuthResult, Err, Ok
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
# bcrypt only looks at the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
INVALID_CHARACTERS_MESSAGE = "{field} contains invalid characters"


def _encodable(value: str) -> bool:
    """False for strings that cannot be stored, such as lone surrogates."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _validate_name(name: str) -> str | None:
    if not name or not name.strip():
        return "Name is required"
    if not _encodable(name):
        return INVALID_CHARACTERS_MESSAGE.format(field="Name")
    if len(name.strip()) < MIN_NAME_LENGTH:
        return f"Name must be at least {MIN_NAME_LENGTH} characters long"
    return None


def _validate_email(email: str) -> str | None:
    if not email or not email.strip():
        return "Email is required"
    if not _encodable(email):
        return INVALID_CHARACTERS_MESSAGE.format(field="Email")
    try:
        email_validator.validate_email(email, check_deliverability=False)
    except email_validator.EmailNotValidError:
        return "Please enter a valid email address"
    return None


def _validate_password(password: str) -> str | None:
    if not password or not password.strip():
        return "Password is required"
    if not _encodable(password):
        return INVALID_CHARACTERS_MESSAGE.format(field="Password")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
    return None


def _check(**fields: str | None) -> None:
    """Raise ValidationError carrying every failing field's message."""
    errors = {name: message for name, message in fields.items() if message}
    if errors:
        raise ValidationError("Invalid input", field_errors=errors)


def _err(kind: AuthErrorKind, message: str, field_errors: dict | None = None) -> Err:
    return Err(AuthError(kind=kind, message=message, field_errors=field_errors or {}))


class AuthService:
    """Signup, login and profile lookup over an injected store and hasher."""

    def __init__(self, repo: UserRepository, hasher: PasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def signup(self, name: str, email: str, password: str) -> AuthResult:
        """Register a new user.

        Does not log the user in; a separate login call is required.
        """
        try:
            _check(
                name=_validate_name(name),
                email=_validate_email(email),
                password=_validate_password(password),
            )
            if self.repo.exists(email):
                return _err(AuthErrorKind.EMAIL_TAKEN, "Email already registered")

            password_hash = self.hasher.hash(password)
            user = self.repo.create(name=name.strip(), email=email, password_hash=password_hash)
        except ValidationError as e:
            return _err(AuthErrorKind.VALIDATION, str(e), e.field_errors)
        except DuplicateEmailError:
            # Lost the race with a concurrent signup; the unique index caught it
            return _err(AuthErrorKind.EMAIL_TAKEN, "Email already registered")
        except StoreUnavailableError:
            logger.error("Signup failed: store unavailable", extra={"email": email})
            return _err(AuthErrorKind.STORE_UNAVAILABLE, "Failed to create account. Please try again.")

        logger.info("User registered", extra={"userId": user.id, "email": email})
        return Ok(user)

    def login(self, email: str, password: str) -> AuthResult:
        """Authenticate a user by email and password.

        Unknown email and wrong password produce the same error so callers
        cannot tell which emails are registered.
        """
        try:
            _check(email=_validate_email(email), password=_validate_password(password))
            user = self.repo.find_by_email(email)
            if not user or not self.hasher.verify(password, user.password_hash or ""):
                logger.info("Login rejected", extra={"email": email})
                return _err(AuthErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)

            user.updated_at = self.repo.touch_login(user.id)
        except ValidationError as e:
            return _err(AuthErrorKind.VALIDATION, str(e), e.field_errors)
        except NotFoundError:
            # Row vanished between lookup and update; report it like any other failed login
            return _err(AuthErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
        except StoreUnavailableError:
            logger.error("Login failed: store unavailable", extra={"email": email})
            return _err(AuthErrorKind.STORE_UNAVAILABLE, "Failed to authenticate. Please try again.")

        logger.info("User logged in", extra={"userId": user.id, "email": email})
        return Ok(user.public())

    def get_user(self, user_id: str) -> AuthResult:
        try:
            user = self.repo.get_by_id(user_id)
        except StoreUnavailableError:
            return _err(AuthErrorKind.STORE_UNAVAILABLE, "Failed to get user")
        if not user:
            return _err(AuthErrorKind.NOT_FOUND, "User not found")
        return Ok(user.public())
