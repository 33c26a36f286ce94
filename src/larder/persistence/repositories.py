"""Repository for recipe documents.

One repository per AsyncSession. List queries are split into ``find`` and
``count``; callers issue them as two statements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from larder.core.ids import new_recipe_id
from larder.core.model import Recipe
from larder.persistence.tables import RecipeTable, utcnow


@dataclass(frozen=True)
class RecipeFilter:
    """List filter.

    Both criteria are case-insensitive substring matches; an empty value
    matches everything. ``search`` hits the title or any ingredient name.
    """

    search: str = ""
    difficulty: str = ""

    def clauses(self) -> list[ColumnElement[bool]]:
        clauses: list[ColumnElement[bool]] = []
        if self.search:
            clauses.append(
                or_(
                    RecipeTable.title.icontains(self.search, autoescape=True),
                    RecipeTable.ingredient_names.icontains(self.search, autoescape=True),
                )
            )
        if self.difficulty:
            clauses.append(RecipeTable.difficulty.icontains(self.difficulty, autoescape=True))
        return clauses


def _to_recipe(row: RecipeTable) -> Recipe:
    return Recipe.from_document(row.id, row.doc, row.created_at, row.updated_at)


class RecipeRepository:
    """Store operations for recipes."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, flt: RecipeFilter, skip: int, limit: int) -> list[Recipe]:
        """Filtered page of recipes ordered by title."""
        stmt = (
            select(RecipeTable)
            .where(*flt.clauses())
            .order_by(RecipeTable.title.asc(), RecipeTable.id.asc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [_to_recipe(row) for row in result.scalars()]

    async def count(self, flt: RecipeFilter) -> int:
        """Number of recipes matching the filter, ignoring pagination."""
        stmt = select(func.count()).select_from(RecipeTable).where(*flt.clauses())
        return int(await self.session.scalar(stmt) or 0)

    async def create(self, doc: dict[str, Any]) -> Recipe:
        row = RecipeTable(id=new_recipe_id())
        row.apply_document(doc)
        self.session.add(row)
        await self.session.flush()
        return _to_recipe(row)

    async def get(self, recipe_id: str) -> Recipe | None:
        row = await self.session.get(RecipeTable, recipe_id)
        return _to_recipe(row) if row is not None else None

    async def update(self, recipe_id: str, changes: dict[str, Any]) -> Recipe | None:
        """Merge ``changes`` into the stored document.

        Returns:
            The updated recipe or None if not found.
        """
        row = await self.session.get(RecipeTable, recipe_id)
        if row is None:
            return None

        row.apply_document({**row.doc, **changes})
        row.updated_at = utcnow()
        await self.session.flush()
        return _to_recipe(row)

    async def delete(self, recipe_id: str) -> Recipe | None:
        """Delete a recipe.

        Returns:
            The deleted recipe or None if not found.
        """
        row = await self.session.get(RecipeTable, recipe_id)
        if row is None:
            return None

        recipe = _to_recipe(row)
        await self.session.delete(row)
        await self.session.flush()
        return recipe
