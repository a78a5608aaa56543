# Standard library imports
from typing import Any

# Third-party imports
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

# Local application imports
from votetrack.settings import settings


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:  # noqa: ARG001
    # SQLite ignores REFERENCES clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_async_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for ``url``.

    SQLite engines get foreign key enforcement, and in-memory SQLite databases
    share a single connection so every session sees the same tables.
    """
    kwargs: dict[str, Any] = {"echo": echo}
    if url.startswith("sqlite") and ":memory:" in url:
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_async_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


# Asynchronous Engine
async_engine = build_async_engine(settings.SQLALCHEMY_ASYNC_DATABASE_URI, echo=settings.SQL_ECHO)
