"""Cache key schema for Larder.

Key format: recipes:page={page}&pageSize={pageSize}&search={search}&difficulty={difficulty}

- page: the caller's page number as given
- pageSize: the clamped page size
- search, difficulty: inserted verbatim (no case folding, no escaping)

Values containing "&" or "=" can produce the same key as a different
query. Case differences in ``search`` produce distinct keys even though
the store matches case-insensitively.
"""

from __future__ import annotations

from larder.core.model import RecipeListQuery


class CacheKeys:
    """Cache key generator following consistent naming convention."""

    PREFIX = "recipes"

    @classmethod
    def recipe_list(cls, query: RecipeListQuery) -> str:
        """Key for one page of the recipe list."""
        return (
            f"{cls.PREFIX}:page={query.page}&pageSize={query.page_size}"
            f"&search={query.search}&difficulty={query.difficulty}"
        )

    @classmethod
    def recipe_list_pattern(cls) -> str:
        """Pattern matching every cached recipe list page.

        Use with Redis SCAN + DEL for cache invalidation.
        """
        return f"{cls.PREFIX}:*"
