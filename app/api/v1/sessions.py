"""Login (create session) and logout (stateless; the client discards its token)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.core.errors import AuthenticationError
from app.core.security import create_access_token, verify_password
from app.repositories.users import UserRepository
from app.schemas.auth import AuthResponse, CurrentUser, LoginRequest
from app.schemas.user import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS = "Invalid credentials."


@router.post("", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with username-or-email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    identifier = body.username.strip()
    user = UserRepository(db).get_by_username_or_email(identifier)
    if user is None:
        logger.warning("Login failed: no account for identifier %s", identifier)
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not verify_password(body.password, user.password_hash):
        logger.warning("Login failed: bad password for identifier %s", identifier)
        raise AuthenticationError(INVALID_CREDENTIALS)

    logger.info("Login success for %s", user.username)
    return AuthResponse(
        message="Login successful.",
        token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Response:
    """JWTs are stateless: nothing to revoke server-side, the client drops the token."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)
