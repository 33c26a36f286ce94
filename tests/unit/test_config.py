"""Tests for settings loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from larder.config import Settings


class TestSettings:
    def test_database_url_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://db/recipes")
        for name in ("PORT", "REDIS_URL", "LARDER_CACHE_TTL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.database_url == "postgresql+asyncpg://db/recipes"
        assert settings.port == 5000
        assert settings.redis_url == "redis://localhost:6379/0"
        assert settings.cache_ttl == 3600

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://db/recipes")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")
        monkeypatch.setenv("LARDER_CACHE_TTL", "60")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.port == 8080
        assert settings.redis_url == "redis://cache:6379/1"
        assert settings.cache_ttl == 60
