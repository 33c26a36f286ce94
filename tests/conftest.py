"""Global pytest configuration and fixtures.

The recipe store runs on in-memory SQLite (aiosqlite) and the cache on
fakeredis, so the whole stack is exercised without external services.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import fakeredis
import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from larder.api.app import create_app
from larder.api.context import AppContext
from larder.cache.redis import RecipeCache
from larder.config import Settings
from larder.persistence.db import Database

SQLITE_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


def make_database() -> Database:
    """Fresh in-memory database; tables are not created."""
    engine = create_async_engine(SQLITE_MEMORY_URL, poolclass=StaticPool)
    return Database(engine)


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url=SQLITE_MEMORY_URL, env="test", enable_metrics=False)


@pytest_asyncio.fixture
async def database() -> AsyncIterator[Database]:
    db = make_database()
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def broken_database() -> AsyncIterator[Database]:
    """Database without tables: every recipe statement fails."""
    db = make_database()
    yield db
    await db.dispose()


@pytest.fixture
def redis_server() -> fakeredis.FakeServer:
    return fakeredis.FakeServer()


@pytest_asyncio.fixture
async def redis_client(redis_server: fakeredis.FakeServer) -> AsyncIterator[FakeRedis]:
    client = FakeRedis(server=redis_server)
    yield client
    await client.aclose()


@pytest.fixture
def cache(redis_client: FakeRedis) -> RecipeCache:
    return RecipeCache(redis_client)


@pytest.fixture
def context(settings: Settings, database: Database, cache: RecipeCache) -> AppContext:
    return AppContext(settings=settings, db=database, cache=cache)


@pytest_asyncio.fixture
async def client(context: AppContext) -> AsyncIterator[AsyncClient]:
    app = create_app(context=context)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


def _recipe_body(title: str = "Pancakes", **overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "title": title,
        "ingredients": [{"name": "Flour", "quantity": "200", "unit": "g"}, {"name": "Egg"}],
        "utensils": ["Bowl", "Pan"],
        "difficulty": "Easy",
        "total time": "20 min",
        "instructions": ["Mix", "Fry"],
    }
    body.update(overrides)
    return body


@pytest.fixture
def recipe_body() -> Callable[..., dict[str, object]]:
    """Factory for recipe request bodies."""
    return _recipe_body


@pytest_asyncio.fixture
async def down_cache() -> AsyncIterator[RecipeCache]:
    """Cache whose server refuses every command with ConnectionError."""
    server = fakeredis.FakeServer()
    server.connected = False
    client = FakeRedis(server=server)
    yield RecipeCache(client)
    await client.aclose()
