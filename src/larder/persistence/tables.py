"""SQLAlchemy ORM models for recipe persistence.

Each recipe is stored as a JSON document (JSONB on PostgreSQL) alongside a
few columns extracted from it for filtering and sorting:
- title: sort key and search target
- difficulty: filter target
- ingredient_names: newline-joined ingredient names, search target
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from larder.core.ids import new_recipe_id

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
DocumentType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def extract_ingredient_names(doc: dict[str, Any]) -> str:
    """Flatten ingredient names into one searchable text column."""
    names = []
    for ingredient in doc.get("ingredients") or []:
        if isinstance(ingredient, dict) and ingredient.get("name"):
            names.append(str(ingredient["name"]))
    return "\n".join(names)


class RecipeTable(Base):
    """Recipe documents."""

    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=new_recipe_id)

    # Extracted for queries
    title: Mapped[str] = mapped_column(Text, nullable=False)
    difficulty: Mapped[str] = mapped_column(Text, nullable=False, default="")
    ingredient_names: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Full document as sent by the client
    doc: Mapped[dict[str, Any]] = mapped_column(DocumentType, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        Index("idx_recipes_title", "title"),
        Index("idx_recipes_difficulty", "difficulty"),
    )

    def apply_document(self, doc: dict[str, Any]) -> None:
        """Replace the stored document and refresh the extracted columns."""
        self.doc = doc
        self.title = str(doc.get("title", ""))
        self.difficulty = str(doc.get("difficulty") or "")
        self.ingredient_names = extract_ingredient_names(doc)
