"""Shared fixtures for integration tests.

Each test gets its own app, built by create_app against a fresh
in-memory SQLite database and a token service on the frozen clock.
"""

import pytest
from sqlmodel import Session

from api.main import create_app
from gateway.config import Settings
from gateway.db import init_db
from gateway.db.models import User, UserRole, UserStatus

from tests.db_utils import drop_test_engine
from tests.http_utils import SyncClient

TEST_SECRET = "test-secret-for-unit-tests"


@pytest.fixture
def make_app(token_service):
    """Factory: build an app for a given provider and overrides."""
    engines = []

    def _make(auth_provider: str = "firebase", **overrides):
        settings = Settings(
            jwt_secret=TEST_SECRET,
            database_url="sqlite://",
            auth_provider=auth_provider,
            log_json=False,
            **overrides,
        )
        app = create_app(settings, token_service=token_service)
        init_db(app.state.engine)
        engines.append(app.state.engine)
        return app

    yield _make

    for engine in engines:
        drop_test_engine(engine)


@pytest.fixture
def app(make_app):
    """App running the Firebase sync flow."""
    return make_app("firebase")


@pytest.fixture
def client(app):
    return SyncClient(app)


@pytest.fixture
def local_app(make_app):
    """App running the password flow."""
    return make_app("local")


@pytest.fixture
def local_client(local_app):
    return SyncClient(local_app)


@pytest.fixture
def seed_user(app):
    """Insert a user directly into the app's database."""

    def _seed(**overrides) -> User:
        values = dict(
            firebase_uid="fb-seed",
            email="seed@x.io",
            first_name="Seed",
            last_name="User",
            role=UserRole.EMPLOYEE,
            status=UserStatus.ACTIVE,
        )
        values.update(overrides)
        with Session(app.state.engine) as session:
            user = User(**values)
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    return _seed
