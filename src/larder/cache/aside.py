"""Cache-aside read path for the recipe list.

1. Build the cache key from the normalized query
2. Return the cached page if there is one (no store query on a hit)
3. Otherwise run the page query and the count query against the store
4. Write the page to the cache, best effort, then return it

Cache failures at any step are logged and the request carries on against
the store. Store failures propagate as StoreError.
"""

from __future__ import annotations

import logging

from orjson import JSONDecodeError
from pydantic import ValidationError

from larder.cache.keys import CacheKeys
from larder.cache.redis import CacheError, RecipeCache
from larder.core.model import PageResult, RecipeListQuery
from larder.observability.metrics import record_cache_error, record_cache_hit, record_cache_miss
from larder.persistence.db import Database
from larder.persistence.repositories import RecipeFilter, RecipeRepository

logger = logging.getLogger(__name__)


class RecipeListService:
    """Serves recipe list pages through the cache."""

    def __init__(self, db: Database, cache: RecipeCache, ttl: int | None = None):
        self.db = db
        self.cache = cache
        self.ttl = ttl

    async def fetch_page(self, query: RecipeListQuery) -> PageResult:
        key = CacheKeys.recipe_list(query)

        cached = await self._read_cached(key)
        if cached is not None:
            record_cache_hit()
            logger.debug("Recipe list cache hit", extra={"cache_key": key})
            return cached

        record_cache_miss()
        page = await self._query_store(query)
        await self._populate(key, page)
        return page

    async def _read_cached(self, key: str) -> PageResult | None:
        try:
            raw = await self.cache.get(key)
        except CacheError as exc:
            record_cache_error("get")
            logger.error("Redis fetch error: %s", exc, extra={"cache_key": key})
            return None

        if raw is None:
            return None

        try:
            return PageResult.from_bytes(raw)
        except (JSONDecodeError, ValidationError) as exc:
            record_cache_error("decode")
            logger.warning("Discarding undecodable cache entry: %s", exc, extra={"cache_key": key})
            return None

    async def _query_store(self, query: RecipeListQuery) -> PageResult:
        # Page and count are two statements with no snapshot shared between
        # them; under concurrent writes the total may not match the page.
        flt = RecipeFilter(search=query.search, difficulty=query.difficulty)
        async with self.db.session() as session:
            repo = RecipeRepository(session)
            recipes = await repo.find(flt, skip=query.skip, limit=query.page_size)
            total = await repo.count(flt)
        return PageResult.build(recipes, total, query)

    async def _populate(self, key: str, page: PageResult) -> None:
        try:
            await self.cache.set(key, page.to_bytes(), ttl=self.ttl)
        except CacheError as exc:
            record_cache_error("set")
            logger.error("Redis set error: %s", exc, extra={"cache_key": key})
