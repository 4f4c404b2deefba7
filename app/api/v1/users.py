"""User account endpoints: signup, read/update/delete self, administrative password reset."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_admin
from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import ConflictError, InputValidationError, NotFoundError
from app.core.security import create_access_token, generate_reset_token, hash_password
from app.repositories.users import UserRepository
from app.schemas.auth import AuthResponse, CurrentUser
from app.schemas.user import (
    PasswordResetConfirmRequest,
    PasswordResetTokenResponse,
    SignUpRequest,
    UpdateUserRequest,
    UserResponse,
)
from app.services.normalize import normalize_profile_update
from app.services.ownership import ensure_same_identity

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_unique(
    users: UserRepository,
    username: str | None,
    email: str | None,
    user_id: int | None = None,
) -> None:
    """Fast-path uniqueness check; the unique indexes remain the source of truth."""
    if username is not None:
        existing = users.get_by_username(username)
        if existing is not None and existing.id != user_id:
            raise ConflictError("Username already exists.")
    if email is not None:
        existing = users.get_by_email(email)
        if existing is not None and existing.id != user_id:
            raise ConflictError("Email already exists.")


@router.post("", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    body: SignUpRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Register a new account (role User) and return a token for it."""
    users = UserRepository(db)
    logger.info("Signup attempt for %s", body.username)
    _ensure_unique(users, body.username, body.email)

    user = users.create(body.username, body.email, hash_password(body.password))
    logger.info("User created: id=%s username=%s", user.id, user.username)
    return AuthResponse(
        message="User created successfully.",
        token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.post("/password-reset/confirm", status_code=status.HTTP_204_NO_CONTENT)
def confirm_password_reset(
    body: PasswordResetConfirmRequest,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Set a new password with a reset token; every previously issued JWT stops working."""
    user = UserRepository(db).reset_password_with_token(body.token, hash_password(body.password))
    if user is None:
        raise InputValidationError("Invalid or expired reset token.")
    logger.info("Password reset completed for user %s", user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    ensure_same_identity(current_user.id, user_id, action="GET")
    user = UserRepository(db).get(user_id)
    if user is None:
        logger.warning("User not found on GET: id=%s", user_id)
        raise NotFoundError("User not found.")
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    body: UpdateUserRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    """
    Partial profile update: only provided fields are applied.

    A new password is written in the same atomic update and bumps the token
    version by one, so the caller must log in again.
    """
    ensure_same_identity(current_user.id, user_id, action="UPDATE")
    body = normalize_profile_update(body)
    users = UserRepository(db)
    _ensure_unique(users, body.username, body.email, user_id=user_id)

    builder = (
        users.new_builder()
        .set_if_present(body.username, "username")
        .set_if_present(body.email, "email")
        .set_if_present(body.first_name, "first_name")
        .set_if_present(body.last_name, "last_name")
        .set_if_present(body.headline, "headline")
        .set_if_present(body.phone, "phone")
        .set_if_present(body.location, "location")
        .set_if_present(body.avatar_url, "avatar_url")
        .set_if_present(body.about, "about")
        .replace_list_if_present(
            [link.model_dump() for link in body.links] if body.links is not None else None,
            "links",
        )
    )
    if body.password:
        updated = users.update_password(user_id, hash_password(body.password), builder=builder)
    else:
        updated = users.update_profile(user_id, builder)
    if updated is None:
        logger.warning("User not found on update: id=%s", user_id)
        raise NotFoundError("User not found.")
    logger.info(
        "User updated: id=%s username=%s password_changed=%s",
        user_id,
        updated.username,
        bool(body.password),
    )
    return UserResponse.model_validate(updated)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Response:
    """Delete the caller's account together with every CV it owns."""
    ensure_same_identity(current_user.id, user_id, action="DELETE")
    UserRepository(db).delete_with_cvs(user_id)
    logger.info("User deleted: id=%s", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/password-reset", response_model=PasswordResetTokenResponse)
def issue_password_reset(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> PasswordResetTokenResponse:
    """Issue a one-off password reset token for a user (Admin only)."""
    settings = get_settings()
    expires_at = datetime.now(UTC) + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
    token = generate_reset_token()
    user = UserRepository(db).issue_password_reset(user_id, token, expires_at)
    if user is None:
        raise NotFoundError("User not found.")
    logger.info("Password reset issued for user %s by admin %s", user_id, _admin.id)
    return PasswordResetTokenResponse(reset_token=token, expires_at=expires_at)
