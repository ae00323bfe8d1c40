"""Port definition for the credential store."""

from datetime import datetime
from typing import Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Persistence of user rows.

    Implementations wrap backend failures in ``StoreUnavailableError`` and
    enforce email uniqueness at write time.
    """

    def exists(self, email: str) -> bool:
        """Return True iff a user with this email exists."""
        ...

    def create(self, name: str, email: str, password_hash: str) -> User:
        """Insert a user and return it without the hash.

        Raises DuplicateEmailError if the email is already registered.
        """
        ...

    def find_by_email(self, email: str) -> User | None:
        """Find a user by email, including the password hash."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID, without the password hash."""
        ...

    def touch_login(self, user_id: str) -> datetime:
        """Bump updated_at for a successful login and return the stored timestamp.

        Raises NotFoundError if no user has this ID.
        """
        ...
