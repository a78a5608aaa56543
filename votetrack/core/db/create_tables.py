# Third-party imports
from sqlalchemy.ext.asyncio import AsyncEngine

# Local application imports
from votetrack.core.monitoring.logging import get_logger

# Importing the models package registers every table on Base.metadata
from votetrack.models import Base

logger = get_logger("core.db")


async def create_all_tables(engine: AsyncEngine) -> list[str]:
    """Create every mapped table that does not exist yet and return the table names."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    table_names = sorted(Base.metadata.tables)
    logger.info(f"Database tables ready: {', '.join(table_names)}")
    return table_names
