"""JWT issuing and the current-user dependency."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from api.dependencies import get_auth_service
from api.models import UserResponse
from api.settings import Settings, get_settings
from domain.model.result import AuthErrorKind, Err
from services.auth_service import AuthService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _require_secret(settings: Settings) -> str:
    if not settings.jwt_secret_key:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )
    return settings.jwt_secret_key


def create_access_token(user_id: str, settings: Settings | None = None) -> str:
    """Create JWT access token for user."""
    settings = settings or get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "exp": now + timedelta(days=settings.jwt_expiration_days),
        "iat": now,
    }
    return jwt.encode(payload, _require_secret(settings), algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: Settings | None = None) -> Optional[str]:
    """Verify JWT token and extract user_id."""
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, _require_secret(settings), algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        return None
    return payload.get("sub")


def get_current_user_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Get current authenticated user (required). Raises 401 if not authenticated."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = verify_token(credentials.credentials)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = service.get_user(user_id)
    if isinstance(result, Err):
        if result.kind == AuthErrorKind.STORE_UNAVAILABLE:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=result.error.message,
            )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return UserResponse.from_domain(result.user)
