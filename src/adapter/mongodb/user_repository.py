"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateEmailError, NotFoundError, StoreUnavailableError
from domain.model.user import User

logger = getLogger(__name__)

_WITHOUT_HASH = {'password_hash': 0}


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection.

        The unique email index is what actually guarantees uniqueness when
        two signups race past the existence check.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            name=doc['name'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            password_hash=doc.get('password_hash'),
        )

    # ── write operations ─────────────────────────────────────

    def create(self, name: str, email: str, password_hash: str) -> User:
        """Insert a new user and return it without the hash."""
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'name': name,
            'email': email,
            'password_hash': password_hash,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateEmailError(email) from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise StoreUnavailableError("Failed to create user") from e

        logger.info("User created", extra={"userId": user_id, "email": email})
        return self._to_domain(user_doc).public()

    def touch_login(self, user_id: str) -> datetime:
        """Bump updated_at; $max keeps it from moving backwards under clock skew."""
        now = datetime.now(timezone.utc)
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$max': {'updated_at': now}},
                projection={'updated_at': 1},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update login timestamp", extra={"userId": user_id, "error": str(e)})
            raise StoreUnavailableError("Failed to update login timestamp") from e

        if doc is None:
            raise NotFoundError(f"User {user_id} not found")
        logger.debug("Updated login timestamp", extra={"userId": user_id})
        return doc['updated_at']

    # ── read operations ──────────────────────────────────────

    def exists(self, email: str) -> bool:
        try:
            return self.collection.count_documents({'email': email}, limit=1) > 0
        except PyMongoError as e:
            logger.error("Failed to check user existence", extra={"email": email, "error": str(e)})
            raise StoreUnavailableError("Failed to check user existence") from e

    def find_by_email(self, email: str) -> User | None:
        """Find a user by email, hash included for verification."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise StoreUnavailableError("Failed to find user") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        try:
            doc = self.collection.find_one({'_id': user_id}, _WITHOUT_HASH)
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StoreUnavailableError("Failed to get user") from e
        return self._to_domain(doc) if doc else None
