"""Tests for the health endpoint."""

from __future__ import annotations

from collections.abc import AsyncIterator

import psutil
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from larder.api.app import create_app
from larder.api.context import AppContext
from larder.api.routers.health import process_stats
from larder.cache.redis import RecipeCache
from larder.config import Settings
from larder.persistence.db import Database


@pytest_asyncio.fixture
async def degraded_client(
    settings: Settings, database: Database, down_cache: RecipeCache
) -> AsyncIterator[AsyncClient]:
    app = create_app(context=AppContext(settings, database, down_cache))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


class TestHealth:
    """Test GET /health."""

    @pytest.mark.asyncio
    async def test_all_healthy(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["databaseStatus"] == "Healthy"
        assert data["cacheStatus"] == "Healthy"
        assert data["uptime"] >= 0
        assert set(data["memoryUsage"]) == {"rss", "vms", "percent"}
        assert data["memoryUsage"]["rss"] > 0

    @pytest.mark.asyncio
    async def test_cache_down(self, degraded_client: AsyncClient) -> None:
        response = await degraded_client.get("/health")

        assert response.status_code == 200
        assert response.json()["databaseStatus"] == "Healthy"
        assert response.json()["cacheStatus"] == "Unhealthy"

    @pytest.mark.asyncio
    async def test_correlation_headers(self, client: AsyncClient) -> None:
        response = await client.get("/health", headers={"x-request-id": "req-1"})

        assert response.headers["x-request-id"] == "req-1"
        assert response.headers["x-correlation-id"] == "req-1"

    def test_process_stats(self) -> None:
        stats = process_stats()
        assert stats["uptime"] >= 0
        assert 0 <= stats["memoryUsage"]["percent"] <= 100

    @pytest.mark.asyncio
    async def test_cors_allows_any_origin(self, client: AsyncClient) -> None:
        response = await client.get("/health", headers={"origin": "https://cook.example"})
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_report_failure(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def broken_stats() -> dict[str, object]:
            raise psutil.AccessDenied(pid=1, msg="no access to process info")

        monkeypatch.setattr("larder.api.routers.health.process_stats", broken_stats)

        response = await client.get("/health")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Health check failed"
        assert "no access to process info" in body["details"]
