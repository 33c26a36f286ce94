"""Process-wide dependencies for the API.

The store and cache clients are built once at startup, held by an
AppContext on ``app.state`` and handed to request handlers through
FastAPI dependencies (see ``larder.api.deps``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from larder.cache import (
    CacheInvalidator,
    RecipeCache,
    RecipeListService,
    RecipeMutationService,
    create_redis,
)
from larder.config import Settings
from larder.persistence.db import Database

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Store, cache and the services built on them."""

    settings: Settings
    db: Database
    cache: RecipeCache
    recipe_lists: RecipeListService = field(init=False)
    recipe_mutations: RecipeMutationService = field(init=False)

    def __post_init__(self) -> None:
        self.recipe_lists = RecipeListService(self.db, self.cache, ttl=self.settings.cache_ttl)
        self.recipe_mutations = RecipeMutationService(self.db, CacheInvalidator(self.cache))

    @classmethod
    def from_settings(cls, settings: Settings) -> AppContext:
        """Create connection pools from configuration.

        Neither pool connects eagerly; an unreachable cache only shows up
        on first use.
        """
        db = Database.from_settings(settings)
        cache = RecipeCache(
            create_redis(settings.redis_url, timeout=settings.cache_timeout),
            ttl=settings.cache_ttl,
        )
        return cls(settings=settings, db=db, cache=cache)

    async def close(self) -> None:
        """Close the store connection, then the cache connection."""
        await self.db.dispose()
        logger.info("Database connections closed")
        await self.cache.close()
        logger.info("Redis connections closed")
