"""Database infrastructure for SQLModel + PostgreSQL.

Usage:
    from gateway.db import create_db_engine, get_session

    engine = create_db_engine(settings.database_url)
    with get_session(engine) as session:
        user = session.get(User, user_id)
"""

from gateway.db.engine import (
    create_db_engine,
    drop_all_tables,
    get_session,
    get_session_dependency,
    init_db,
)

__all__ = [
    "create_db_engine",
    "drop_all_tables",
    "get_session",
    "get_session_dependency",
    "init_db",
]
