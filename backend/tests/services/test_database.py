"""Cafe Database - rollback-and-reraise sessions, get_db, settings wiring."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from cafe_api.config import Settings
from cafe_api.infrastructure.database import (
    configure_database, current_database, database_from_settings, get_db,
)
from cafe_api.models.cafe import Cafe


async def test_storage_errors_propagate_unchanged(database):
    original = OperationalError("SELECT 1", {}, Exception("connection refused"))
    with pytest.raises(OperationalError) as exc_info:
        async with database.session():
            raise original
    assert exc_info.value is original


async def test_failed_session_leaves_no_rows(database):
    with pytest.raises(KeyError):
        async with database.session() as session:
            session.add(Cafe(title="Blue Bottle", address="1 Main St"))
            await session.flush()
            raise KeyError("boom")

    async with database.session() as session:
        result = await session.execute(select(Cafe))
        assert result.scalars().all() == []


async def test_count_cafes(database):
    async with database.session() as session:
        session.add(Cafe(title="Blue Bottle", address="1 Main St"))
        await session.commit()
    assert await database.count_cafes() == 1


async def test_get_db_requires_configured_database():
    configure_database(None)
    with pytest.raises(RuntimeError, match="not configured"):
        await anext(get_db())


async def test_get_db_yields_session_of_configured_database(database):
    configure_database(database)
    try:
        gen = get_db()
        session = await anext(gen)
        assert session.bind is database.engine
        await gen.aclose()
    finally:
        configure_database(None)
    assert current_database() is None


async def test_database_from_settings_uses_url():
    db = database_from_settings(Settings(database_url="sqlite+aiosqlite:///:memory:"))
    try:
        assert db.engine.url.drivername == "sqlite+aiosqlite"
    finally:
        await db.dispose()


def test_postgres_urls_rewritten_to_asyncpg():
    for url in ("postgres://u:p@h/db", "postgresql://u:p@h/db"):
        assert Settings(database_url=url).database_url == "postgresql+asyncpg://u:p@h/db"
