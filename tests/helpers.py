"""Shared test scaffolding: in-memory SQLite sessions and an API client with get_db overridden."""

import unittest
from datetime import date

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.database import get_db
from app.core.security import hash_password
from app.main import app
from app.models import Base
from app.repositories.users import UserRepository
from app.schemas.cv import CVCreate, Education, WorkExperience

PASSWORD = "correct-horse-battery"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory SQLite database with every table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def cv_payload(**overrides) -> CVCreate:
    data = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "city": "London",
        "country": "UK",
        "postcode": "N1 9GU",
        "phone": "+44 20 7946 0000",
        "email": "ada@example.com",
        "job_title": "Engineer",
        "summary": "Writes programs for the analytical engine.",
        "skills": ["Go"],
        "work_experiences": [
            WorkExperience(
                position="Analyst",
                company="Babbage & Co",
                start_date=date(1842, 1, 1),
                description="Notes on the engine.",
            )
        ],
        "educations": [
            Education(degree="Mathematics", school="Home tutoring", start_date=date(1830, 1, 1))
        ],
        "links": [],
    }
    data.update(overrides)
    return CVCreate(**data)


class RepositoryTestCase(unittest.TestCase):
    """One in-memory database and session per test."""

    def setUp(self) -> None:
        self.SessionLocal = make_session_factory()
        self.db: Session = self.SessionLocal()

    def tearDown(self) -> None:
        self.db.close()

    def make_user(self, username: str = "alice", email: str | None = None, roles=None):
        return UserRepository(self.db).create(
            username,
            email or f"{username}@example.com",
            "$2b$04$notarealhashnotarealhashnotarealhashnotarealhash",
            roles=roles,
        )


class ApiTestCase(unittest.TestCase):
    """TestClient against the real app; each request gets its own session on a shared in-memory DB."""

    def setUp(self) -> None:
        self.SessionLocal = make_session_factory()

        def _get_test_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = _get_test_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def url(self, path: str) -> str:
        return f"{settings.API_PREFIX}{path}"

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def sign_up(self, username: str, email: str | None = None, password: str = PASSWORD) -> tuple[int, str]:
        """Create an account through the API and return (user id, token)."""
        response = self.client.post(
            self.url("/users"),
            json={"username": username, "email": email or f"{username}@example.com", "password": password},
        )
        self.assertEqual(response.status_code, 201, response.text)
        body = response.json()
        return body["user"]["id"], body["token"]

    def login(self, username: str, password: str = PASSWORD) -> str:
        response = self.client.post(
            self.url("/sessions"),
            json={"username": username, "password": password},
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["token"]

    def make_admin(self, username: str = "admin") -> str:
        """Seed an Admin directly (signup only grants User) and return a token for it."""
        db = self.SessionLocal()
        try:
            UserRepository(db).ensure_admin(username, f"{username}@example.com", hash_password(PASSWORD))
        finally:
            db.close()
        return self.login(username)
