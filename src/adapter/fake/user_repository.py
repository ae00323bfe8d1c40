"""In-memory implementation of UserRepository for testing."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.errors import DuplicateEmailError, NotFoundError, StoreUnavailableError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        # Set to simulate a lost connection; every call then raises.
        self.unavailable = False

    def _check_available(self) -> None:
        if self.unavailable:
            raise StoreUnavailableError("Fake store is unavailable")

    # ── write operations ─────────────────────────────────────

    def create(self, name: str, email: str, password_hash: str) -> User:
        self._check_available()
        if any(u.email == email for u in self.store.values()):
            raise DuplicateEmailError(email)

        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            name=name,
            email=email,
            created_at=now,
            updated_at=now,
            password_hash=password_hash,
        )
        self.store[user_id] = user
        return user.public()

    def touch_login(self, user_id: str) -> datetime:
        self._check_available()
        user = self.store.get(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")

        user.updated_at = max(user.updated_at, datetime.now(timezone.utc))
        return user.updated_at

    # ── read operations ──────────────────────────────────────

    def exists(self, email: str) -> bool:
        self._check_available()
        return any(u.email == email for u in self.store.values())

    def find_by_email(self, email: str) -> User | None:
        self._check_available()
        for user in self.store.values():
            if user.email == email:
                return replace(user)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        self._check_available()
        user = self.store.get(user_id)
        return user.public() if user else None
