"""Recipe API router.

- GET    /recipes              - List recipes (paginated, filtered, cached)
- POST   /recipes              - Create recipe
- GET    /recipes/{recipe_id}  - Get recipe
- PUT    /recipes/{recipe_id}  - Update recipe
- DELETE /recipes/{recipe_id}  - Delete recipe

Every successful mutation evicts the cached list pages.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import ORJSONResponse

from larder.api.deps import ContextDep, RecipeIdDep
from larder.api.errors import DependencyError, NotFoundError, ValidationError
from larder.core.model import RecipeCreate, RecipeListQuery, RecipeUpdate
from larder.persistence.db import StoreError
from larder.persistence.repositories import RecipeRepository

router = APIRouter(prefix="/recipes", tags=["Recipes"])


@router.get("")
async def list_recipes(
    ctx: ContextDep,
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    page_size: Annotated[
        str | None,
        Query(alias="pageSize", description="Page size, defaults to 10, capped at 100"),
    ] = None,
    search: Annotated[str, Query(description="Matches title or ingredient names")] = "",
    difficulty: Annotated[str, Query(description="Matches difficulty")] = "",
) -> ORJSONResponse:
    """List recipes matching the filters, one page at a time."""
    query = RecipeListQuery.normalize(
        page=page, page_size=page_size, search=search, difficulty=difficulty
    )
    try:
        result = await ctx.recipe_lists.fetch_page(query)
    except StoreError as exc:
        raise DependencyError("Failed to fetch recipes", str(exc)) from exc
    return ORJSONResponse(content=result.model_dump(by_alias=True))


@router.post("", status_code=201)
async def create_recipe(payload: RecipeCreate, ctx: ContextDep) -> ORJSONResponse:
    """Create a recipe."""
    try:
        recipe = await ctx.recipe_mutations.create(payload)
    except StoreError as exc:
        raise ValidationError("Failed to create recipe", str(exc)) from exc
    return ORJSONResponse(status_code=201, content=recipe.to_json())


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: RecipeIdDep, ctx: ContextDep) -> ORJSONResponse:
    """Get one recipe by id."""
    try:
        async with ctx.db.session() as session:
            recipe = await RecipeRepository(session).get(recipe_id)
    except StoreError as exc:
        raise DependencyError("Failed to fetch recipe", str(exc)) from exc

    if recipe is None:
        raise NotFoundError("Recipe", recipe_id)
    return ORJSONResponse(content=recipe.to_json())


@router.put("/{recipe_id}")
async def update_recipe(
    recipe_id: RecipeIdDep, payload: RecipeUpdate, ctx: ContextDep
) -> ORJSONResponse:
    """Merge the given fields into an existing recipe."""
    try:
        recipe = await ctx.recipe_mutations.update(recipe_id, payload)
    except StoreError as exc:
        raise ValidationError("Failed to update recipe", str(exc)) from exc

    if recipe is None:
        raise NotFoundError("Recipe", recipe_id)
    return ORJSONResponse(content=recipe.to_json())


@router.delete("/{recipe_id}")
async def delete_recipe(recipe_id: RecipeIdDep, ctx: ContextDep) -> ORJSONResponse:
    """Delete a recipe."""
    try:
        recipe = await ctx.recipe_mutations.delete(recipe_id)
    except StoreError as exc:
        raise DependencyError("Failed to delete recipe", str(exc)) from exc

    if recipe is None:
        raise NotFoundError("Recipe", recipe_id)
    return ORJSONResponse(content={"message": "Recipe deleted successfully"})
