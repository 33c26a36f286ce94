"""Redis cache client for Larder.

Thin async wrapper over redis-py. Every call either succeeds or raises
CacheError; deciding what a failure means is left to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, cast

import redis.asyncio as redis
from redis.exceptions import RedisError

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)

# Default TTL (1 hour)
DEFAULT_TTL = 3600

# Keys deleted per DEL round-trip during pattern invalidation
DELETE_BATCH_SIZE = 500


class CacheError(Exception):
    """The cache was unreachable or failed a command."""


def create_redis(url: str, timeout: float | None = None) -> Redis:
    """Create a pooled Redis client.

    Connections are opened lazily, so this never fails for an
    unreachable server.
    """
    return redis.from_url(  # type: ignore[no-untyped-call]
        url,
        decode_responses=False,  # We're storing bytes
        socket_timeout=timeout,
        socket_connect_timeout=timeout,
    )


class RecipeCache:
    """Key/value cache with TTL and pattern deletion."""

    def __init__(self, client: Redis, ttl: int = DEFAULT_TTL):
        self.client = client
        self.ttl = ttl

    async def get(self, key: str) -> bytes | None:
        try:
            return cast(bytes | None, await self.client.get(key))
        except (RedisError, OSError) as exc:
            raise CacheError(f"GET {key} failed: {exc}") from exc

    async def set(self, key: str, value: bytes, ttl: int | None = None) -> None:
        """Store ``value`` under ``key`` in one SET ... EX command."""
        try:
            await self.client.set(key, value, ex=ttl or self.ttl)
        except (RedisError, OSError) as exc:
            raise CacheError(f"SET {key} failed: {exc}") from exc

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching ``pattern``.

        Uses SCAN to avoid blocking on large keyspaces. Returns the number
        of keys deleted.
        """
        deleted = 0
        batch: list[bytes] = []
        try:
            async for key in self.client.scan_iter(match=pattern, count=DELETE_BATCH_SIZE):
                batch.append(key)
                if len(batch) >= DELETE_BATCH_SIZE:
                    deleted += await self.client.delete(*batch)
                    batch.clear()
            if batch:
                deleted += await self.client.delete(*batch)
        except (RedisError, OSError) as exc:
            raise CacheError(f"delete of {pattern} failed: {exc}") from exc
        return deleted

    async def ping(self) -> bool:
        """Check Redis connectivity."""
        try:
            await cast(Awaitable[bool], self.client.ping())
            return True
        except (RedisError, OSError) as exc:
            logger.warning("Redis ping failed: %s", exc)
            return False

    async def close(self) -> None:
        """Close Redis connections."""
        await self.client.aclose()
