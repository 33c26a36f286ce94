"""Tests for recipe identifiers."""

import pytest

from larder.core.ids import InvalidRecipeId, new_recipe_id, parse_recipe_id


class TestRecipeIds:
    """Test identifier generation and validation."""

    def test_new_id_is_valid(self) -> None:
        recipe_id = new_recipe_id()
        assert parse_recipe_id(recipe_id) == recipe_id

    def test_new_ids_are_unique(self) -> None:
        assert new_recipe_id() != new_recipe_id()

    def test_normalizes_case(self) -> None:
        value = "0B6F5C2E-8A4D-4F7B-9C1E-2D3A4B5C6D7E"
        assert parse_recipe_id(value) == value.lower()

    @pytest.mark.parametrize("value", ["", "123", "not-a-uuid", "507f1f77bcf86cd799439011"])
    def test_rejects_malformed(self, value: str) -> None:
        with pytest.raises(InvalidRecipeId):
            parse_recipe_id(value)
