"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from domain.model.user import User


class UserResponse(BaseModel):
    """Public view of a user; never carries the password hash."""
    id: str = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="User email")
    created_at: datetime = Field(..., description="Account creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp (bumped on login)")

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class RegisterRequest(BaseModel):
    """Request model for user registration.

    Fields are plain strings so that the service reports malformed input in
    the same response shape as every other failure.
    """
    name: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: str = ""
    password: str = ""


class RegisterResponse(BaseModel):
    success: bool
    user: Optional[UserResponse] = None
    error: Optional[str] = None
    errors: Optional[dict[str, str]] = Field(None, description="Per-field validation messages")


class LoginResponse(BaseModel):
    success: bool
    user: Optional[UserResponse] = None
    token: Optional[str] = Field(None, description="Opaque bearer token")
    error: Optional[str] = None
    errors: Optional[dict[str, str]] = Field(None, description="Per-field validation messages")
