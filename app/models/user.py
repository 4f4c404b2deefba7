"""ORM model for application users (auth, RBAC and profile)."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from app.models.base import Base, JSONDocument

DEFAULT_ROLES = ["User"]


class User(Base):
    """
    User account for JWT authentication, role-based access control and the
    self-service profile.

    roles: list of role labels, e.g. ["User"] or ["User", "Admin"].
    token_version: bumped on every password change; tokens carrying an older
    version are rejected.
    links: list of {"type": ..., "url": ...} objects.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    roles = Column(JSONDocument, nullable=False, default=lambda: list(DEFAULT_ROLES))
    token_version = Column(Integer, nullable=False, default=1)

    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    headline = Column(String(255), nullable=True)
    phone = Column(String(64), nullable=True)
    location = Column(String(255), nullable=True)
    avatar_url = Column(String(2048), nullable=True)
    about = Column(Text, nullable=True)
    links = Column(JSONDocument, nullable=False, default=list)

    password_reset_token = Column(String(128), nullable=True, unique=True)
    password_reset_expires_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
