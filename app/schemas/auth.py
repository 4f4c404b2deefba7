"""Request/response schemas for session (login) endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Credentials for login. username accepts either a username or an email."""

    username: str = Field(..., min_length=1, max_length=320, description="Username or email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class AuthResponse(BaseModel):
    """Returned by login and signup."""

    message: str
    token: str | None = Field(default=None, description="JWT access token (Bearer)")
    user: UserResponse | None = None


class CurrentUser(BaseModel):
    """Authenticated identity (from a verified token) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    roles: list[str] = Field(default_factory=list)
