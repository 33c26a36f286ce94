"""Shared FastAPI dependencies for Larder routers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Path, Request

from larder.api.context import AppContext
from larder.api.errors import ValidationError
from larder.core.ids import InvalidRecipeId, parse_recipe_id


def get_context(request: Request) -> AppContext:
    """The AppContext created at startup."""
    return request.app.state.context


def decoded_recipe_id(
    recipe_id: Annotated[str, Path(description="Recipe identifier (UUID)")],
) -> str:
    """Validate the recipe identifier from the path.

    Raises:
        ValidationError: If the identifier is not well formed
    """
    try:
        return parse_recipe_id(recipe_id)
    except InvalidRecipeId as exc:
        raise ValidationError("Invalid recipe ID format", str(exc)) from exc


# Type aliases for cleaner router signatures
ContextDep = Annotated[AppContext, Depends(get_context)]
RecipeIdDep = Annotated[str, Depends(decoded_recipe_id)]
