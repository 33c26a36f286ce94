from __future__ import annotations

import uuid


class InvalidRecipeId(ValueError):
    pass


def new_recipe_id() -> str:
    """Generate a fresh recipe identifier (canonical UUID string)."""
    return str(uuid.uuid4())


def parse_recipe_id(value: str) -> str:
    """Validate a recipe identifier and return its canonical form.

    Accepts any spelling ``uuid.UUID`` understands (hyphenated, braced,
    upper case) and normalizes it to the lower-case hyphenated form that
    the store uses as primary key.
    """
    if not value:
        raise InvalidRecipeId("empty value")
    try:
        return str(uuid.UUID(value))
    except (ValueError, AttributeError, TypeError) as exc:
        raise InvalidRecipeId(f"not a valid recipe id: {value!r}") from exc
