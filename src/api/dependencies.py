from fastapi import Depends, HTTPException, Request

from adapter.hashing.bcrypt_hasher import BcryptPasswordHasher
from adapter.mongodb.user_repository import MongoUserRepository
from api.settings import get_settings
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository
from services.auth_service import AuthService


def _get_db(request: Request):
    """Get the MongoDB database opened at startup, raising 503 if unavailable."""
    client = getattr(request.app.state, 'mongo_client', None)
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[get_settings().database_name]


def get_user_repo(request: Request) -> UserRepository:
    return MongoUserRepository(_get_db(request))


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().bcrypt_rounds)


def get_auth_service(
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    return AuthService(repo, hasher)
