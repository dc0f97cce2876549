"""Service test fixtures - async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The client fixture installs that database with configure_database(), so
      route tests exercise the production get_db dependency

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (JSON columns and the unique constraint behave the same as on PostgreSQL)
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from cafe_api.db.base import Base
from cafe_api.infrastructure.database import CafeDatabase, configure_database
from cafe_api.models.cafe import Cafe
from cafe_api.services.cafe_store import CafeStore
from cafe_api.main import app


@pytest.fixture
async def database():
    """Fresh in-memory database with the cafes schema."""
    db = CafeDatabase("sqlite+aiosqlite:///:memory:")
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db
    await db.dispose()


@pytest.fixture
def test_session_factory(database):
    return database.sessions


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return CafeStore(test_db)


@pytest.fixture
async def client(database):
    """ASGI client; requests reach the store through the real get_db."""
    configure_database(database)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    configure_database(None)


@pytest.fixture
async def seed_cafes(test_db):
    """Insert cafes with explicit, strictly increasing created_at values.

    Returns a callable taking titles oldest-first; inserted out of
    chronological order so tests prove ordering is applied after the query.
    """
    base = datetime(2020, 1, 1, 9, 0, tzinfo=timezone.utc)

    async def _seed(*titles: str) -> list[Cafe]:
        cafes = [
            Cafe(
                title=title,
                address=f"{i + 1} Main Street",
                created_at=base + timedelta(minutes=i),
            )
            for i, title in enumerate(titles)
        ]
        for cafe in sorted(cafes, key=lambda c: c.title):
            test_db.add(cafe)
        await test_db.commit()
        return cafes

    return _seed
