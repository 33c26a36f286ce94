"""Tests for cache key generation."""

from larder.cache.keys import CacheKeys
from larder.core.model import RecipeListQuery


class TestRecipeListKey:
    """Test recipe list key generation."""

    def test_key_format(self) -> None:
        """List key has the documented layout."""
        query = RecipeListQuery.normalize(page=2, page_size=20, search="egg", difficulty="Easy")
        key = CacheKeys.recipe_list(query)
        assert key == "recipes:page=2&pageSize=20&search=egg&difficulty=Easy"

    def test_defaults(self) -> None:
        """Empty query uses page 1, size 10 and empty filters."""
        key = CacheKeys.recipe_list(RecipeListQuery.normalize())
        assert key == "recipes:page=1&pageSize=10&search=&difficulty="

    def test_deterministic(self) -> None:
        """Same normalized query always yields the same key."""
        a = RecipeListQuery.normalize(page=3, page_size="25", search="Tomato")
        b = RecipeListQuery.normalize(page=3, page_size=25, search="Tomato")
        assert CacheKeys.recipe_list(a) == CacheKeys.recipe_list(b)
        assert CacheKeys.recipe_list(a) == CacheKeys.recipe_list(a)

    def test_clamped_page_sizes_share_a_key(self) -> None:
        """pageSize 150 and 100 both clamp to 100."""
        over = RecipeListQuery.normalize(page_size=150)
        at_max = RecipeListQuery.normalize(page_size=100)
        assert CacheKeys.recipe_list(over) == CacheKeys.recipe_list(at_max)
        assert "pageSize=100" in CacheKeys.recipe_list(over)

    def test_search_case_is_kept(self) -> None:
        """Keys are case-sensitive even though the store match is not."""
        lower = RecipeListQuery.normalize(search="egg")
        upper = RecipeListQuery.normalize(search="EGG")
        assert CacheKeys.recipe_list(lower) != CacheKeys.recipe_list(upper)

    def test_delimiters_are_not_escaped(self) -> None:
        """A search containing '&difficulty=' collides with a difficulty filter."""
        in_search = RecipeListQuery.normalize(search="egg&difficulty=Hard")
        in_difficulty = RecipeListQuery.normalize(search="egg", difficulty="Hard&difficulty=")
        assert in_search != in_difficulty
        assert CacheKeys.recipe_list(in_search) == CacheKeys.recipe_list(in_difficulty)

    def test_page_is_not_clamped(self) -> None:
        """The caller's page number goes into the key as given."""
        key = CacheKeys.recipe_list(RecipeListQuery.normalize(page=9999))
        assert key.startswith("recipes:page=9999&")


class TestInvalidationPattern:
    """Test the list invalidation pattern."""

    def test_pattern_matches_prefix(self) -> None:
        assert CacheKeys.recipe_list_pattern() == "recipes:*"

    def test_every_list_key_starts_with_prefix(self) -> None:
        key = CacheKeys.recipe_list(RecipeListQuery.normalize(search="x"))
        assert key.startswith(CacheKeys.recipe_list_pattern()[:-1])
