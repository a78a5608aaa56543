"""Shared pytest fixtures for VoteTrack tests."""

import datetime
import os

# Must be set before any votetrack module reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ADMIN_API_TOKEN", "test-admin-token")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from votetrack.core.db import build_async_engine, create_all_tables, get_async_session  # noqa: E402
from votetrack.gateway import SQLAlchemyGateway  # noqa: E402
from votetrack.models import Chamber, Legislator, Motion, MotionOutcome  # noqa: E402
from votetrack.settings import settings  # noqa: E402


@pytest.fixture
async def engine():
    """Fresh in-memory database with every table created."""
    engine = build_async_engine("sqlite+aiosqlite:///:memory:")
    await create_all_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def gateway(session) -> SQLAlchemyGateway:
    return SQLAlchemyGateway(session)


@pytest.fixture
async def seeded(gateway) -> dict[str, Legislator | Motion]:
    """Three legislators and two motions, no vote records."""
    items: dict[str, Legislator | Motion] = {}
    for data in (
        {"id": "l1", "name": "Ana Popescu", "party": "PSD", "chamber": Chamber.DEPUTIES, "region": "Cluj"},
        {"id": "l2", "name": "Bogdan Ionescu", "party": "PNL", "chamber": Chamber.SENATE, "region": "Iasi"},
        {"id": "l3", "name": "Cristina Marin", "party": "PSD", "chamber": Chamber.DEPUTIES, "region": "Timis"},
    ):
        items[data["id"]] = await gateway.create_legislator(data)

    for data in (
        {
            "id": "v1",
            "title": "Budget amendment for public health",
            "description": "Raises the hospital investment ceiling",
            "chamber": Chamber.DEPUTIES,
            "date": datetime.date(2024, 3, 12),
            "topics": ["health", "budget"],
            "outcome": MotionOutcome.PASSED,
        },
        {
            "id": "v2",
            "title": "Education reform",
            "description": "Changes the national exam calendar",
            "chamber": Chamber.SENATE,
            "date": datetime.date(2023, 11, 2),
            "topics": ["education", "budget"],
            "outcome": MotionOutcome.FAILED,
            "total_for": 10,
            "total_against": 12,
        },
    ):
        items[data["id"]] = await gateway.create_motion(data)
    return items


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Token": settings.ADMIN_API_TOKEN}


@pytest.fixture
async def client(session, seeded):
    """HTTP client for the app, sharing the seeded test session."""
    from main import app

    async def override_get_async_session():
        yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
