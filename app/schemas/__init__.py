"""Pydantic request/response schemas."""

from app.schemas.auth import AuthResponse, CurrentUser, LoginRequest
from app.schemas.common import Link
from app.schemas.cv import CVCreate, CVResponse, CVUpdate, Education, WorkExperience
from app.schemas.health import HealthResponse
from app.schemas.template import (
    CVTemplateCreate,
    CVTemplateDetail,
    CVTemplateListItem,
    CVTemplateUpdate,
    MarkupBody,
    ReactSchemaBody,
    TemplateBody,
)
from app.schemas.user import (
    PasswordResetConfirmRequest,
    PasswordResetTokenResponse,
    SignUpRequest,
    UpdateUserRequest,
    UserResponse,
)

__all__ = [
    "AuthResponse",
    "CVCreate",
    "CVResponse",
    "CVTemplateCreate",
    "CVTemplateDetail",
    "CVTemplateListItem",
    "CVTemplateUpdate",
    "CVUpdate",
    "CurrentUser",
    "Education",
    "HealthResponse",
    "Link",
    "LoginRequest",
    "MarkupBody",
    "PasswordResetConfirmRequest",
    "PasswordResetTokenResponse",
    "ReactSchemaBody",
    "SignUpRequest",
    "TemplateBody",
    "UpdateUserRequest",
    "UserResponse",
    "WorkExperience",
]
