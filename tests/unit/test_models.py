"""Tests for the user table model and schema helpers."""

from sqlalchemy import inspect

from gateway.db import drop_all_tables
from gateway.db.models import User, UserRole, UserStatus, utcnow

from tests.db_utils import create_test_engine


def test_utcnow_is_timezone_aware():
    assert utcnow().utcoffset().total_seconds() == 0


def test_timestamps_are_timezone_aware():
    user = User(first_name="Ada", last_name="L", role=UserRole.EMPLOYEE)

    assert user.created_at.tzinfo is not None
    assert user.status is UserStatus.PENDING
    assert User.__table__.c.created_at.type.timezone is True
    assert User.__table__.c.updated_at.type.timezone is True


def test_drop_all_tables_removes_users():
    engine = create_test_engine()
    assert "users" in inspect(engine).get_table_names()

    drop_all_tables(engine)

    assert "users" not in inspect(engine).get_table_names()
    engine.dispose()
