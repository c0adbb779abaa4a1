"""SQLModel engine and session management.

This module provides:
- Database engine creation with connection pooling
- Session dependency for FastAPI, bound to the app's engine
- Database initialization utilities

PostgreSQL is the production database. SQLite (in-memory) is used by tests.
"""

from contextlib import contextmanager
from typing import Generator

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for the given URL.

    PostgreSQL gets a small pre-pinged pool. SQLite gets a single shared
    connection so an in-memory database survives across sessions and
    threads.

    Args:
        database_url: SQLAlchemy database URL
        echo: Log emitted SQL

    Returns:
        SQLAlchemy Engine
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    # pool_pre_ping ensures connections are valid before use
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_timeout=10,
    )


@contextmanager
def get_session(engine: Engine) -> Generator[Session, None, None]:
    """Get a database session.

    Usage:
        with get_session(engine) as session:
            user = session.get(User, user_id)

    Yields:
        SQLModel Session instance
    """
    with Session(engine) as session:
        try:
            yield session
        except Exception:
            session.rollback()
            raise


def get_session_dependency(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions.

    Uses the engine created by create_app and stored on app.state.

    Usage in FastAPI:
        @app.get("/users/{user_id}")
        def get_user(user_id: UUID, session: Session = Depends(get_session_dependency)):
            return session.get(User, user_id)
    """
    with get_session(request.app.state.engine) as session:
        yield session


def init_db(engine: Engine) -> None:
    """Create all tables defined in SQLModel models.

    Should only be used for development/testing.
    Use Alembic migrations for production.
    """
    # Import models so they're registered with SQLModel metadata
    from gateway.db.models import User  # noqa: F401

    SQLModel.metadata.create_all(engine)


def drop_all_tables(engine: Engine) -> None:
    """Drop all tables. USE WITH CAUTION - data loss will occur."""
    SQLModel.metadata.drop_all(engine)
