"""API routers for Larder."""

from larder.api.routers import health, metrics, recipes

__all__ = ["health", "metrics", "recipes"]
