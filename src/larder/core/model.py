"""Pydantic models for recipes and recipe list pages.

Recipe documents are schemaless beyond a handful of known fields: unknown
keys sent by clients are kept and round-trip through the store untouched.
JSON field names follow the public API (``_id``, ``total time``,
``totalRecipes``), Python attribute names stay snake_case.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Keys owned by the store; never taken from a client payload
RESERVED_KEYS = frozenset({"_id", "createdAt", "updatedAt"})


class Ingredient(BaseModel):
    """One ingredient line; only ``name`` is required."""

    model_config = ConfigDict(extra="allow")

    name: str


class RecipeBase(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: str = Field(min_length=1)
    ingredients: list[Ingredient] = Field(default_factory=list)
    utensils: list[str] = Field(default_factory=list)
    difficulty: str = ""
    total_time: str | int | float | None = Field(default=None, alias="total time")
    instructions: list[str] | str = Field(default_factory=list)


class RecipeCreate(RecipeBase):
    """Payload for POST /recipes."""

    def to_document(self) -> dict[str, Any]:
        doc = self.model_dump(by_alias=True, mode="json", exclude_none=True)
        return {k: v for k, v in doc.items() if k not in RESERVED_KEYS}


class RecipeUpdate(BaseModel):
    """Payload for PUT /recipes/{id}.

    Every field is optional; only the keys present in the request body are
    merged into the stored document.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: str | None = Field(default=None, min_length=1)
    ingredients: list[Ingredient] | None = None
    utensils: list[str] | None = None
    difficulty: str | None = None
    total_time: str | int | float | None = Field(default=None, alias="total time")
    instructions: list[str] | str | None = None

    @field_validator("title", "ingredients", "utensils", "difficulty", "instructions")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # Omit a field to keep it; only "total time" may be cleared with null
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

    def to_changes(self) -> dict[str, Any]:
        changes = self.model_dump(by_alias=True, mode="json", exclude_unset=True)
        return {k: v for k, v in changes.items() if k not in RESERVED_KEYS}


class Recipe(RecipeBase):
    """A stored recipe as returned by the API."""

    id: str = Field(alias="_id")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        # SQLite hands timestamps back without tzinfo
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_document(
        cls,
        recipe_id: str,
        doc: dict[str, Any],
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> Recipe:
        return cls.model_validate(
            {**doc, "_id": recipe_id, "createdAt": created_at, "updatedAt": updated_at}
        )

    def to_json(self) -> dict[str, Any]:
        """JSON-ready dict using public field names."""
        return self.model_dump(by_alias=True, mode="json")


class RecipeListQuery(BaseModel):
    """Normalized query parameters for GET /recipes.

    ``page`` is the caller's value as given; ``page_size`` is already
    defaulted and clamped into [1, MAX_PAGE_SIZE].
    """

    model_config = ConfigDict(frozen=True)

    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    search: str = ""
    difficulty: str = ""

    @classmethod
    def normalize(
        cls,
        page: int | None = None,
        page_size: int | str | None = None,
        search: str | None = None,
        difficulty: str | None = None,
    ) -> RecipeListQuery:
        return cls(
            page=page if page is not None else DEFAULT_PAGE,
            page_size=clamp_page_size(page_size),
            search=search or "",
            difficulty=difficulty or "",
        )

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size


def clamp_page_size(raw: int | str | None) -> int:
    """Default and clamp a requested page size.

    Missing, zero and non-integer values fall back to DEFAULT_PAGE_SIZE;
    anything else is clamped into [1, MAX_PAGE_SIZE].
    """
    if raw is None or raw == "":
        return DEFAULT_PAGE_SIZE
    try:
        size = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_PAGE_SIZE
    if size == 0:
        return DEFAULT_PAGE_SIZE
    return max(1, min(size, MAX_PAGE_SIZE))


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size)


class PageResult(BaseModel):
    """One page of recipes plus pagination totals.

    Recipes are carried as plain JSON dicts: the cache stores and returns
    them verbatim.
    """

    model_config = ConfigDict(populate_by_name=True)

    recipes: list[dict[str, Any]]
    total_recipes: int = Field(alias="totalRecipes", ge=0)
    total_pages: int = Field(alias="totalPages", ge=0)
    current_page: int = Field(alias="currentPage")

    @classmethod
    def build(
        cls, recipes: list[Recipe], total: int, query: RecipeListQuery
    ) -> PageResult:
        return cls(
            recipes=[recipe.to_json() for recipe in recipes],
            total_recipes=total,
            total_pages=total_pages(total, query.page_size),
            current_page=query.page,
        )

    def to_bytes(self) -> bytes:
        """Serialize to JSON bytes."""
        return orjson.dumps(self.model_dump(by_alias=True))

    @classmethod
    def from_bytes(cls, data: bytes) -> PageResult:
        """Deserialize from JSON bytes."""
        return cls.model_validate(orjson.loads(data))
