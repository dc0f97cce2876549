"""Cafe Database - async engine, per-request session, FastAPI dependency.

Invariants:
    - One CafeDatabase per process, installed by configure_database() from the lifespan
    - A session that exits with an exception is rolled back and the exception
      re-raised unchanged (storage failures reach the 500 catch-all)
    - Sessions never expire attributes on commit: created cafes stay readable
      after the request transaction ends
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from cafe_api.config import Settings
from cafe_api.models.cafe import Cafe

logger = logging.getLogger(__name__)


class CafeDatabase:
    """Engine plus session factory for the cafes store."""

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 20,
        max_overflow: int = 10,
        echo: bool = False,
    ):
        options: dict = {"echo": echo, "pool_pre_ping": True}
        # SQLite picks its own pool; sizing only applies to server databases
        if not url.startswith("sqlite"):
            options |= {"pool_size": pool_size, "max_overflow": max_overflow}
        self.engine = create_async_engine(url, **options)
        self.sessions = async_sessionmaker(self.engine, expire_on_commit=False)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.sessions() as session:
            try:
                yield session
            except Exception as exc:
                await session.rollback()
                logger.warning(
                    "Rolled back cafe session",
                    extra={"error_code": type(exc).__name__},
                )
                raise

    async def count_cafes(self) -> int:
        """Row count of the cafes table; fails if the schema is missing."""
        async with self.session() as session:
            result = await session.execute(
                select(func.count()).select_from(Cafe),
            )
            return result.scalar_one()

    async def dispose(self) -> None:
        await self.engine.dispose()


_database: CafeDatabase | None = None


def configure_database(database: CafeDatabase | None) -> CafeDatabase | None:
    """Install (or clear, with None) the process-wide database."""
    global _database
    _database = database
    return database


def current_database() -> CafeDatabase | None:
    return _database


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one session per request."""
    if _database is None:
        raise RuntimeError("Database not configured")
    async with _database.session() as session:
        yield session


def database_from_settings(settings: Settings) -> CafeDatabase:
    return CafeDatabase(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
