"""Bearer-token auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import AuthenticationError
from app.core.security import decode_access_token
from app.repositories.users import UserRepository
from app.schemas.auth import CurrentUser
from app.services.ownership import ROLE_ADMIN, ensure_role

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the current user.

    Raises 401 if the token is missing, invalid, expired, names an unknown
    user, or predates the user's last password change (token version).
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid or expired token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")

    user = UserRepository(db).get(user_id)
    if user is None:
        raise AuthenticationError("User not found")
    if payload.get("ver") != user.token_version:
        logger.info("Rejected stale token for user %s", user_id)
        raise AuthenticationError("Token has been revoked")
    return CurrentUser(
        id=user.id,
        username=user.username,
        email=user.email,
        roles=list(user.roles or []),
    )


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with the Admin role. Raises 403 otherwise."""
    ensure_role(current_user, ROLE_ADMIN)
    return current_user
