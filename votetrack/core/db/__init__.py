# Local application imports
from votetrack.core.db.create_async_engine import async_engine, build_async_engine
from votetrack.core.db.create_tables import create_all_tables
from votetrack.core.db.get_async_session import AsyncSessionLocal, get_async_session

__all__ = [
    "AsyncSessionLocal",
    "async_engine",
    "build_async_engine",
    "create_all_tables",
    "get_async_session",
]
