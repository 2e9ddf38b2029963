"""Shared fixtures for the notification service tests."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="forum-notifications-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_TIMEZONE"] = "UTC"

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient  # noqa: E402

from app.domain.entities import User  # noqa: E402
from app.infrastructure import database  # noqa: E402
from app.infrastructure.notifications import EventBus  # noqa: E402
from app.infrastructure.repositories import UserRepository  # noqa: E402
from app.infrastructure.security import create_access_token  # noqa: E402


@pytest.fixture(autouse=True)
def setup_database():
    """Give every test empty tables."""

    database.initialize_database()
    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    yield


@pytest.fixture()
def db_session():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def make_user(db_session):
    """Return a factory that stores a user in the directory."""

    def _make_user(username: str, *, role: str = "user") -> User:
        return UserRepository(db_session).create(
            User(id=None, username=username, role=role)
        )

    return _make_user


@pytest.fixture()
def client(bus: EventBus):
    """Return a test client bound to an application using ``bus``."""

    from main import create_app

    app = create_app(event_bus=bus)
    with TestClient(app) as test_client:
        yield test_client


def _token_for(user: User) -> str:
    return create_access_token(user_id=user.id, username=user.username, role=user.role)


@pytest.fixture()
def token_for():
    return _token_for


@pytest.fixture()
def auth_headers():
    """Return a helper building the ``Authorization`` header for a user."""

    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {_token_for(user)}"}

    return _auth_headers
