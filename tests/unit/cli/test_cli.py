"""Tests for the command-line interface."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from larder.cli import app
from larder.config import get_settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestCli:
    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "serve" in result.output
        assert "init-db" in result.output

    def test_init_db(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'larder.db'}")

        result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Database ready" in result.output
        assert (tmp_path / "larder.db").exists()

    def test_serve_runs_app_factory(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://db/recipes")
        calls: list[dict[str, object]] = []
        monkeypatch.setattr("uvicorn.run", lambda **kwargs: calls.append(kwargs))

        result = runner.invoke(app, ["serve", "--port", "9000"])

        assert result.exit_code == 0
        assert calls[0]["app"] == "larder.api.app:create_app"
        assert calls[0]["factory"] is True
        assert calls[0]["port"] == 9000
        assert calls[0]["access_log"] is False

    def test_serve_defaults_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://db/recipes")
        monkeypatch.setenv("PORT", "7000")
        calls: list[dict[str, object]] = []
        monkeypatch.setattr("uvicorn.run", lambda **kwargs: calls.append(kwargs))

        result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0
        assert calls[0]["port"] == 7000
        assert calls[0]["log_level"] == "info"

    @pytest.mark.parametrize("command", ["serve", "init-db"])
    def test_missing_database_url(self, command: str, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setattr("uvicorn.run", lambda **kwargs: None)

        result = runner.invoke(app, [command])

        assert result.exit_code == 1
