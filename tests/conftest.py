"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown on in-memory SQLite
- A recording fake database session
- FastAPI test client with the database dependency overridden
- Bearer tokens for a regular user and an admin
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import jobly.models  # noqa: F401  Register tables on Base.metadata
from jobly.core.database import Base, get_db
from jobly.core.security import create_access_token
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE and FK checks unless asked
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


class FakeResult:
    """Stands in for a SQLAlchemy Result whose rows are plain dicts."""

    def __init__(self, rows):
        self._rows = list(rows)

    def mappings(self):
        return self

    def all(self):
        return list(self._rows)

    def first(self):
        return self._rows[0] if self._rows else None


class FakeSession:
    """
    Records executed statements and replays queued result rows.

    Each call to execute() consumes the next queued item: a list of rows, or
    an exception instance to raise. Once the queue is empty every statement
    returns no rows.
    """

    def __init__(self, *results):
        self.results = list(results)
        self.statements = []
        self.commits = 0
        self.rollbacks = 0

    def execute(self, statement, params=None):
        self.statements.append((str(statement), dict(params or {})))
        rows = self.results.pop(0) if self.results else []
        if isinstance(rows, Exception):
            raise rows
        return FakeResult(rows)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        pass


@pytest.fixture
def fake_db():
    return FakeSession()


@pytest.fixture
def client(fake_db):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        yield fake_db

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def user_token():
    return create_access_token("u1", is_admin=False)


@pytest.fixture
def admin_token():
    return create_access_token("admin", is_admin=True)


@pytest.fixture
def user_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def sample_company():
    """Sample company as returned by the repository"""
    return {
        "handle": "acme",
        "name": "Acme Corp",
        "description": "Makes anvils",
        "numEmployees": 50,
        "logoUrl": "http://acme.example/logo.png",
    }


@pytest.fixture
def sample_job():
    """Sample job as returned by the repository"""
    return {
        "id": 1,
        "title": "Anvil Engineer",
        "salary": 100000,
        "equity": 0.05,
        "companyHandle": "acme",
    }


@pytest.fixture
def make_db():
    """Factory for FakeSession instances with queued results"""
    return FakeSession
