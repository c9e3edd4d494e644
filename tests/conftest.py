"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from linkshelf.database import Base, build_engine, get_db
from linkshelf.main import app


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/linkshelf", "/linkshelf_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from linkshelf import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_auth_headers(client, email: str, name: str, password: str = "testpass123"):
    """Register and log in a user, returning bearer headers for them."""
    response = client.post(
        "/auth/register",
        json={"email": email, "password": password, "name": name},
    )
    assert response.status_code == 201
    user_id = response.json()["id"]

    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    token = response.json()["accessToken"]
    # Only the explicit headers should authenticate later requests
    client.cookies.clear()

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, email=email)


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return make_auth_headers(client, "test@example.com", "Test User")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return make_auth_headers(client, "other@example.com", "Other User")


@pytest.fixture
def create_link(client):
    """Post a link as the given user and return its id."""

    def _create(headers, **fields):
        body = {
            "url": "https://example.com",
            "title": "Example",
            "userId": headers.user_id,
            **fields,
        }
        response = client.post("/links", headers=headers, json=body)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _create
