"""Shared fixtures: a controllable clock, token service and fast bcrypt."""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Set test environment variables before any imports
os.environ.setdefault("JWT_SECRET", "test-secret-for-unit-tests")

TEST_SECRET = "test-secret-for-unit-tests"


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def frozen_clock():
    """Clock pinned to a fixed instant."""
    return FrozenClock(datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def token_service(frozen_clock):
    """TokenService signing with the test secret on the frozen clock."""
    from api.auth.jwt import TokenService

    return TokenService(TEST_SECRET, clock=frozen_clock)


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Use the minimum bcrypt cost so hashing tests stay quick."""
    from api.auth import password

    monkeypatch.setattr(password, "BCRYPT_ROUNDS", 4)
