"""Environment-driven configuration."""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from adapter.hashing.bcrypt_hasher import BCRYPT_ROUNDS


@dataclass(frozen=True)
class Settings:
    mongo_url: str | None
    database_name: str
    jwt_secret_key: str | None
    jwt_algorithm: str
    jwt_expiration_days: int
    bcrypt_rounds: int
    cors_origins: str
    port: int

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            mongo_url=os.getenv('MONGO_URL'),
            database_name=os.getenv('MONGODB_DATABASE', 'accounts'),
            jwt_secret_key=os.getenv('JWT_SECRET_KEY'),
            jwt_algorithm="HS256",
            jwt_expiration_days=int(os.getenv('JWT_EXPIRATION_DAYS', '7')),
            bcrypt_rounds=int(os.getenv('BCRYPT_ROUNDS', str(BCRYPT_ROUNDS))),
            cors_origins=os.getenv('CORS_ORIGINS', '*'),
            port=int(os.getenv('PORT', '8000')),
        )


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process; .env values never override real env vars."""
    load_dotenv()
    return Settings.from_env()
