"""SQLite test database helpers."""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import event
from sqlalchemy.engine import Engine

from gateway.db import create_db_engine, drop_all_tables, init_db

TEST_DATABASE_URL = "sqlite://"


def create_test_engine() -> Engine:
    """Create an in-memory SQLite engine with all tables."""
    engine = create_db_engine(TEST_DATABASE_URL)
    init_db(engine)
    return engine


def drop_test_engine(engine: Engine) -> None:
    drop_all_tables(engine)
    engine.dispose()


class QueryCounter:
    """Collects the SQL statements executed on an engine."""

    def __init__(self):
        self.statements: list[str] = []

    def __call__(self, conn, cursor, statement, parameters, context, executemany):
        self.statements.append(statement)

    @property
    def count(self) -> int:
        return len(self.statements)


@contextmanager
def count_queries(engine: Engine) -> Generator[QueryCounter, None, None]:
    """Record every statement sent to ``engine`` inside the block."""
    counter = QueryCounter()
    event.listen(engine, "before_cursor_execute", counter)
    try:
        yield counter
    finally:
        event.remove(engine, "before_cursor_execute", counter)
