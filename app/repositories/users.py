"""User persistence: lookups by unique key, atomic profile/password updates, deletion."""

import logging
from datetime import UTC, datetime

from app.models.cv import CV
from app.models.user import DEFAULT_ROLES, User
from app.repositories.base import Repository
from app.services.updates import UpdateBuilder

logger = logging.getLogger(__name__)


class UserRepository(Repository[User]):
    model = User
    conflict_message = "Username or email already exists."

    # Lookups compare exactly as stored; callers normalize if they need to.

    def get_by_username(self, username: str) -> User | None:
        return self._first(User.username == username)

    def get_by_email(self, email: str) -> User | None:
        return self._first(User.email == email)

    def get_by_username_or_email(self, identifier: str) -> User | None:
        """Login lookup: a username match wins over an email match."""
        return self.get_by_username(identifier) or self.get_by_email(identifier)

    def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        roles: list[str] | None = None,
    ) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            roles=list(roles or DEFAULT_ROLES),
            token_version=1,
            links=[],
        )
        return self.insert(user)

    def update_profile(self, user_id: int, builder: UpdateBuilder) -> User | None:
        """Apply builder to the user in one atomic statement; None if the user is gone."""
        return self.commit_builder([User.id == user_id], builder)

    def update_password(
        self,
        user_id: int,
        password_hash: str,
        bump_token_version: bool = True,
        builder: UpdateBuilder | None = None,
    ) -> User | None:
        """
        Set a new password hash, bumping the token version by one unless told
        not to. Pending profile changes on builder land in the same statement.
        """
        if builder is None:
            builder = self.new_builder()
        builder.set(password_hash, "password_hash")
        if bump_token_version:
            builder.increment("token_version")
        return self.commit_builder([User.id == user_id], builder)

    def issue_password_reset(self, user_id: int, token: str, expires_at: datetime) -> User | None:
        builder = (
            self.new_builder()
            .set(token, "password_reset_token")
            .set(expires_at, "password_reset_expires_at")
        )
        return self.commit_builder([User.id == user_id], builder)

    def reset_password_with_token(
        self,
        token: str,
        password_hash: str,
        now: datetime | None = None,
    ) -> User | None:
        """
        Consume a reset token: set the password, clear the token and bump the
        token version in one statement. Returns None when the token is unknown
        or expired.
        """
        now = now or datetime.now(UTC)
        builder = (
            self.new_builder()
            .set(password_hash, "password_hash")
            .set(None, "password_reset_token")
            .set(None, "password_reset_expires_at")
            .increment("token_version")
        )
        return self.commit_builder(
            [
                User.password_reset_token == token,
                User.password_reset_expires_at.is_not(None),
                User.password_reset_expires_at > now,
            ],
            builder,
        )

    def delete_with_cvs(self, user_id: int) -> int:
        """Delete the user and every CV they own in one transaction. Returns users deleted (0 or 1)."""
        try:
            cvs_deleted = (
                self.db.query(CV)
                .filter(CV.owner_id == user_id)
                .delete(synchronize_session="fetch")
            )
            users_deleted = self.delete_where([User.id == user_id], commit=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Deleted user %s with %s owned CVs", user_id, cvs_deleted)
        return users_deleted

    def ensure_admin(self, username: str, email: str, password_hash: str) -> User:
        """Return the account with email, creating it with the Admin role if missing."""
        existing = self.get_by_email(email)
        if existing is not None:
            return existing
        return self.create(username, email, password_hash, roles=["User", "Admin"])
