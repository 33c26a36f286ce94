"""Cache layer for Larder.

Redis caching of recipe list pages with the cache-aside pattern:
- Deterministic keys derived from the normalized list query
- Read-through on a miss, best-effort population
- Coarse invalidation of every list page on any recipe mutation
- TTL-based expiration bounds staleness when eviction fails
"""

from larder.cache.aside import RecipeListService
from larder.cache.invalidation import CacheInvalidator, RecipeMutationService
from larder.cache.keys import CacheKeys
from larder.cache.redis import CacheError, RecipeCache, create_redis

__all__ = [
    # Core cache
    "CacheKeys",
    "CacheError",
    "RecipeCache",
    "create_redis",
    # Read path
    "RecipeListService",
    # Write path
    "CacheInvalidator",
    "RecipeMutationService",
]
