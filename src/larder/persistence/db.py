"""Async database access for the recipe store.

Wraps a SQLAlchemy 2.0 asyncio engine (asyncpg on PostgreSQL) and its
session factory in a single object that is created at startup and handed
to whoever needs it.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from larder.config import Settings

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The recipe store was unreachable or rejected a statement."""


class Database:
    """Engine plus session factory for the recipe store."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Database:
        """Create the engine using the pool settings from configuration."""
        options: dict[str, object] = {
            "pool_pre_ping": True,
            "echo": settings.db_echo,
        }
        if not settings.database_url.startswith("sqlite"):
            options.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_recycle=settings.db_pool_recycle,
            )
        return cls(create_async_engine(settings.database_url, **options))

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Provide a transactional scope around a series of operations.

        Commits on success and rolls back on error. Driver and SQLAlchemy
        failures are re-raised as StoreError.

        Usage:
            async with db.session() as session:
                repo = RecipeRepository(session)
                await repo.create(doc)
        """
        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception as exc:
            await session.rollback()
            if isinstance(exc, (SQLAlchemyError, OSError)):
                raise StoreError(str(exc)) from exc
            raise
        finally:
            await session.close()

    async def create_all(self) -> None:
        """Create tables if they do not exist."""
        from larder.persistence.tables import Base

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(str(exc)) from exc

    async def ping(self) -> bool:
        """Check database connectivity."""
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except StoreError as exc:
            logger.warning("Database ping failed: %s", exc)
            return False

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
