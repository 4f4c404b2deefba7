"""Access decisions made before any repository call.

The identity check compares the token subject with the id in the request
path; it never loads the target resource.
"""

import logging
from typing import TYPE_CHECKING

from app.core.errors import AuthorizationError

if TYPE_CHECKING:
    from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

ROLE_USER = "User"
ROLE_ADMIN = "Admin"


def ensure_same_identity(subject_id: int | str, resource_id: int | str, action: str = "access") -> None:
    """Raise AuthorizationError unless the caller is the resource's identity."""
    if str(subject_id) != str(resource_id):
        logger.warning(
            "Forbidden %s on user %s by user %s",
            action,
            resource_id,
            subject_id,
        )
        raise AuthorizationError("You may only access your own account.")


def has_role(identity: "CurrentUser", role: str) -> bool:
    return role in (identity.roles or [])


def ensure_role(identity: "CurrentUser", role: str) -> None:
    """Raise AuthorizationError when identity lacks role."""
    if not has_role(identity, role):
        logger.warning("Forbidden: user %s lacks role %s", identity.id, role)
        raise AuthorizationError(f"{role} access required")
