"""
Pytest configuration and fixtures.
"""

from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tests.factories import make_user
from tests.test_constants import TEST_INTERNAL_JOB_TOKEN, TEST_SECRET_KEY

# Force an in-memory test DB; don't inherit from .env
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["SECRET_KEY"] = TEST_SECRET_KEY
os.environ["INTERNAL_JOB_TOKEN"] = TEST_INTERNAL_JOB_TOKEN
os.environ["TEMP_AUTH_ENABLED"] = "true"


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    from user_service.main import app

    return TestClient(app)


@pytest.fixture
def client_with_db(db: Session) -> TestClient:
    """TestClient with get_db overridden to use the test db session."""
    from user_service.db.session import get_db
    from user_service.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    c = TestClient(app)
    yield c
    app.dependency_overrides.pop(get_db, None)
    app.state.credential_store.clear()


@pytest.fixture
def db() -> Session:
    """Session on a fresh in-memory schema. Tables are dropped after each test."""
    import user_service.models  # noqa: F401
    from user_service.db.session import Base, SessionLocal, engine

    Base.metadata.create_all(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


@pytest.fixture
def alice(db: Session):
    return make_user(db, "Alice", "alice@example.com")


@pytest.fixture
def bob(db: Session):
    return make_user(db, "Bob", "bob@example.com")


@pytest.fixture
def carol(db: Session):
    return make_user(db, "Carol", "carol@example.com")


@pytest.fixture
def workspace(db: Session, alice):
    """Workspace created by alice (alice is OWNER)."""
    from user_service.services.workspaces import create_workspace

    return create_workspace(db, "Team", "Alice's team", alice.user_id)
