#!/usr/bin/env python
"""
Script to create database tables for VoteTrack
"""

# Standard library imports
import asyncio
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Local application imports
from votetrack.core.db import async_engine, create_all_tables  # noqa: E402


async def main() -> None:
    print(f"Creating database tables on {async_engine.url.render_as_string(hide_password=True)}...")
    try:
        tables = await create_all_tables(async_engine)
    finally:
        await async_engine.dispose()

    print("\nCreated tables:")
    for table in tables:
        print(f"  - {table}")


if __name__ == "__main__":
    asyncio.run(main())
