# expense_backend/tests/conftest.py
# Test configuration and fixtures for pytest

import os

# Settings are cached on first import, so these must be set before the app loads
os.environ.setdefault("EXPENSE_DATABASE_URL", "sqlite://")
os.environ.setdefault("EXPENSE_BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from expense_backend import bootstrap
from expense_backend.dependencies import get_db
from expense_backend.main import app
from expense_backend.models import Base, User

# --- Test Database Setup ---
# One in-memory SQLite database shared through a single static connection.
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# --- Pytest Fixtures ---

@pytest.fixture(scope="function")
def db_session():
    """
    Fresh tables for every test: create them, yield a session,
    then drop everything so the next test starts clean.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    TestClient whose `get_db` dependency hands out the test session,
    rolling back on errors the same way the real dependency does.
    """

    def override_get_db():
        try:
            yield db_session
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def users(db_session):
    """The two demo accounts, seeded without sample expenses."""
    bootstrap.initialize(db_session, seed_samples=False)
    db_session.commit()
    return {user.name: user for user in db_session.query(User).all()}
