"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Tables are created before each test and
dropped after, so no test data persists.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hisaab_kitaab.auth.dependencies import get_current_user
from hisaab_kitaab.main import app
from hisaab_kitaab.models.base import Base, get_db
from hisaab_kitaab.models.repository import Repository, RetryPolicy
from hisaab_kitaab.schemas.auth import UserCreate
from hisaab_kitaab.services.auth_service import AuthService


# Use SQLite for tests; no external database needed.
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def repo(db_session):
    """A Repository that fails fast instead of retrying."""
    return Repository(db_session, RetryPolicy(max_attempts=1))


@pytest.fixture
def password():
    return "secret123"


@pytest.fixture
def user(repo, password):
    """An active user who logs in with `password`."""
    created = AuthService(repo).create_user(UserCreate(
        name="Test User",
        email="user@example.com",
        password=password,
    ))
    repo.commit()
    return created


@pytest.fixture
def anon_client(db_session):
    """
    A test client on the test database with real authentication.

    Requests carry no token unless the test adds one.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client(anon_client, user):
    """A test client already logged in as `user`."""
    app.dependency_overrides[get_current_user] = lambda: user
    return anon_client
