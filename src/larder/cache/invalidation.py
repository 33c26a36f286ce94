"""Write path for recipes and the cache invalidation it triggers.

Every successful create, update or delete evicts all cached recipe list
pages. Eviction happens after the store transaction has committed and a
failed eviction never undoes the mutation: stale pages then live until
their TTL runs out.
"""

from __future__ import annotations

import logging

from larder.cache.keys import CacheKeys
from larder.cache.redis import CacheError, RecipeCache
from larder.core.model import Recipe, RecipeCreate, RecipeUpdate
from larder.observability.metrics import record_cache_error, record_cache_evictions
from larder.persistence.db import Database
from larder.persistence.repositories import RecipeRepository

logger = logging.getLogger(__name__)


class CacheInvalidator:
    """Evicts cached recipe list pages."""

    def __init__(self, cache: RecipeCache):
        self.cache = cache

    async def invalidate_recipe_lists(self) -> int:
        """Delete every cached list page.

        Returns the number of keys deleted, 0 when the cache is unreachable.
        """
        pattern = CacheKeys.recipe_list_pattern()
        try:
            deleted = await self.cache.delete_pattern(pattern)
        except CacheError as exc:
            record_cache_error("delete")
            logger.error("Redis cache clear error: %s", exc)
            return 0

        record_cache_evictions(deleted)
        logger.debug(f"Invalidated {deleted} recipe list cache entries")
        return deleted


class RecipeMutationService:
    """Recipe create/update/delete followed by list cache invalidation."""

    def __init__(self, db: Database, invalidator: CacheInvalidator):
        self.db = db
        self.invalidator = invalidator

    async def create(self, payload: RecipeCreate) -> Recipe:
        async with self.db.session() as session:
            recipe = await RecipeRepository(session).create(payload.to_document())
        logger.info("Created recipe", extra={"recipe_id": recipe.id})
        await self.invalidator.invalidate_recipe_lists()
        return recipe

    async def update(self, recipe_id: str, payload: RecipeUpdate) -> Recipe | None:
        """Returns None when no recipe has this id; nothing is evicted then."""
        async with self.db.session() as session:
            recipe = await RecipeRepository(session).update(recipe_id, payload.to_changes())
        if recipe is None:
            return None
        logger.info("Updated recipe", extra={"recipe_id": recipe_id})
        await self.invalidator.invalidate_recipe_lists()
        return recipe

    async def delete(self, recipe_id: str) -> Recipe | None:
        """Returns None when no recipe has this id; nothing is evicted then."""
        async with self.db.session() as session:
            recipe = await RecipeRepository(session).delete(recipe_id)
        if recipe is None:
            return None
        logger.info("Deleted recipe", extra={"recipe_id": recipe_id})
        await self.invalidator.invalidate_recipe_lists()
        return recipe
