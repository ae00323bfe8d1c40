from typing import Protocol


class PasswordHasher(Protocol):
    """One-way password hashing."""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...
