"""Request/response schemas for user account endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from app.schemas.common import Link, strip_text


class SignUpRequest(BaseModel):
    """Payload for POST /users."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return strip_text(v)


class UpdateUserRequest(BaseModel):
    """
    Partial profile update for PUT /users/{id}.

    Only provided (non-null) fields are applied. Supplying password changes it
    and invalidates every previously issued token.
    """

    username: str | None = Field(default=None, min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    headline: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=64)
    location: str | None = Field(default=None, max_length=255)
    avatar_url: str | None = Field(default=None, max_length=2048)
    about: str | None = Field(default=None, max_length=10_000)
    links: list[Link] | None = Field(default=None, max_length=50)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: str | None) -> str | None:
        return strip_text(v)


class UserResponse(BaseModel):
    """User profile as returned to its owner (no password hash, no token version)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    headline: str | None = None
    phone: str | None = None
    location: str | None = None
    avatar_url: str | None = None
    about: str | None = None
    links: list[Link] = Field(default_factory=list)


class PasswordResetTokenResponse(BaseModel):
    """Issued by an administrator; hand the token to the user out of band."""

    reset_token: str
    expires_at: datetime


class PasswordResetConfirmRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
