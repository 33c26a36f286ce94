"""Recipe store: SQLAlchemy async engine, tables and repository."""

from larder.persistence.db import Database, StoreError
from larder.persistence.repositories import RecipeFilter, RecipeRepository

__all__ = ["Database", "StoreError", "RecipeFilter", "RecipeRepository"]
