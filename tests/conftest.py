"""Pytest configuration and fixtures."""

import os

import pytest

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/rank_tracker", "/rank_tracker_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

# The app reads its settings at import time
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from rank_tracker.database import Base, get_db  # noqa: E402
from rank_tracker.main import app  # noqa: E402
from rank_tracker.services.ranking import RankLookup, get_ranking_service  # noqa: E402

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class AuthHeaders(dict):
    """Dict subclass that also stores user info."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


class FakeRankingService:
    """Stands in for RankingService; records calls and returns a fixed result."""

    def __init__(self, result: RankLookup | None = None):
        self.result = result or RankLookup.found(7)
        self.calls: list[tuple[str, str]] = []

    async def lookup_rank(self, search_phrase: str, url: str) -> RankLookup:
        self.calls.append((search_phrase, url))
        return self.result


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

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


@pytest.fixture
def ranking_service():
    """Ranking service double; tests adjust result/error as needed."""
    return FakeRankingService()


@pytest.fixture(scope="function")
def client(db, ranking_service):
    """Create a test client with database and ranking overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ranking_service] = lambda: ranking_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register_and_login(client, email: str, password: str = "testpass123") -> AuthHeaders:
    """Sign up a user, log in, and return bearer auth headers."""
    response = client.post(
        "/api/v1/auth/signup",
        json={
            "email": email,
            "password": password,
            "first_name": "Test",
            "last_name": "User",
            "company": "Acme",
        },
    )
    assert response.status_code == 201
    user_id = response.json()["id"]

    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    token = response.json()["access_token"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, email=email)


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_and_login(client, "test@example.com")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return register_and_login(client, "other@example.com")
