"""CORS for browser clients of the recipe API.

Origins come from ``LARDER_CORS_ORIGINS`` (a JSON list, default ``["*"]``).
Credentials are never allowed, which keeps a wildcard origin valid.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from larder.config import Settings


@dataclass(frozen=True)
class CORSConfig:
    """Origins, methods and headers allowed for cross-origin requests."""

    allow_origins: tuple[str, ...] = ("*",)
    allow_methods: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
    allow_headers: tuple[str, ...] = (
        "Content-Type",
        "Accept",
        "X-Request-ID",
        "X-Correlation-ID",
    )
    expose_headers: tuple[str, ...] = ("X-Request-ID", "X-Correlation-ID")
    max_age: int = 600

    @classmethod
    def from_settings(cls, settings: Settings) -> CORSConfig:
        return cls(allow_origins=tuple(settings.cors_origins))


def add_cors_middleware(app: FastAPI, config: CORSConfig | None = None) -> None:
    config = config or CORSConfig()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.allow_origins),
        allow_credentials=False,
        allow_methods=list(config.allow_methods),
        allow_headers=list(config.allow_headers),
        expose_headers=list(config.expose_headers),
        max_age=config.max_age,
    )
