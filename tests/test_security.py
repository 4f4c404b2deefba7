"""Unit tests for password hashing and JWT access tokens."""

import unittest
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import jwt

from app.core.config import settings
from app.core.security import (
    create_access_token,
    decode_access_token,
    generate_reset_token,
    hash_password,
    verify_password,
)


def _user(**overrides):
    data = {
        "id": 42,
        "username": "alice",
        "email": "alice@example.com",
        "roles": ["User"],
        "token_version": 3,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


class TestPasswords(unittest.TestCase):
    def test_hash_and_verify(self) -> None:
        hashed = hash_password("s3cret-password")
        self.assertNotEqual(hashed, "s3cret-password")
        self.assertTrue(verify_password("s3cret-password", hashed))
        self.assertFalse(verify_password("wrong-password", hashed))

    def test_malformed_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))


class TestAccessTokens(unittest.TestCase):
    def test_claims_round_trip(self) -> None:
        payload = decode_access_token(create_access_token(_user()))
        self.assertEqual(payload["sub"], "42")
        self.assertEqual(payload["name"], "alice")
        self.assertEqual(payload["email"], "alice@example.com")
        self.assertEqual(payload["roles"], ["User"])
        self.assertEqual(payload["ver"], 3)
        self.assertEqual(payload["iss"], settings.JWT_ISSUER)
        self.assertEqual(payload["aud"], settings.JWT_AUDIENCE)

    def test_expired_token_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "sub": "1",
                "iss": settings.JWT_ISSUER,
                "aud": settings.JWT_AUDIENCE,
                "iat": now - timedelta(hours=2),
                "exp": now - timedelta(hours=1),
            },
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token)

    def test_foreign_audience_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "sub": "1",
                "iss": settings.JWT_ISSUER,
                "aud": "someone-else",
                "iat": now,
                "exp": now + timedelta(minutes=5),
            },
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(jwt.InvalidAudienceError):
            decode_access_token(token)

    def test_wrong_signature_rejected(self) -> None:
        token = create_access_token(_user())
        with self.assertRaises(jwt.PyJWTError):
            jwt.decode(
                token,
                "another-secret-with-at-least-32-characters",
                algorithms=[settings.JWT_ALGORITHM],
                audience=settings.JWT_AUDIENCE,
            )


class TestResetTokens(unittest.TestCase):
    def test_tokens_are_unique_and_url_safe(self) -> None:
        tokens = {generate_reset_token() for _ in range(20)}
        self.assertEqual(len(tokens), 20)
        for token in tokens:
            self.assertRegex(token, r"^[A-Za-z0-9_-]+$")
