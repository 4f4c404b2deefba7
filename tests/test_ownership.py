"""Unit tests for identity and role checks."""

import unittest

from app.core.errors import AuthorizationError
from app.schemas.auth import CurrentUser
from app.services.ownership import (
    ROLE_ADMIN,
    ROLE_USER,
    ensure_role,
    ensure_same_identity,
    has_role,
)


class TestEnsureSameIdentity(unittest.TestCase):
    def test_matching_ids_pass(self) -> None:
        ensure_same_identity(7, 7)
        ensure_same_identity("7", 7)

    def test_mismatch_raises_forbidden(self) -> None:
        with self.assertRaises(AuthorizationError) as ctx:
            ensure_same_identity(7, 8, action="UPDATE")
        self.assertEqual(ctx.exception.status_code, 403)


class TestRoles(unittest.TestCase):
    def setUp(self) -> None:
        self.user = CurrentUser(id=1, username="u", email="u@example.com", roles=[ROLE_USER])
        self.admin = CurrentUser(
            id=2, username="a", email="a@example.com", roles=[ROLE_USER, ROLE_ADMIN]
        )

    def test_has_role(self) -> None:
        self.assertTrue(has_role(self.admin, ROLE_ADMIN))
        self.assertFalse(has_role(self.user, ROLE_ADMIN))

    def test_ensure_role(self) -> None:
        ensure_role(self.admin, ROLE_ADMIN)
        with self.assertRaises(AuthorizationError):
            ensure_role(self.user, ROLE_ADMIN)
