from dataclasses import dataclass, replace
from datetime import datetime


@dataclass
class User:
    """Domain model representing a registered account."""
    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    password_hash: str | None = None

    def public(self) -> "User":
        """Return a copy of this user without the password hash."""
        return replace(self, password_hash=None)
