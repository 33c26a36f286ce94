"""Health check endpoint for Larder.

Reports store and cache reachability together with process uptime and
memory usage. Dependency outages are reported, not raised: the endpoint
answers 200 as long as it can build the report.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable

import psutil
from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from larder.api.deps import ContextDep
from larder.api.errors import ErrorBody

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

HEALTHY = "Healthy"
UNHEALTHY = "Unhealthy"

CHECK_TIMEOUT = 5.0  # seconds


async def _probe(name: str, check: Awaitable[bool]) -> str:
    try:
        healthy = await asyncio.wait_for(check, timeout=CHECK_TIMEOUT)
    except asyncio.TimeoutError:
        logger.warning(f"{name} health check timed out")
        healthy = False
    return HEALTHY if healthy else UNHEALTHY


def process_stats() -> dict[str, Any]:
    """Uptime (seconds) and memory usage of this process."""
    process = psutil.Process()
    memory = process.memory_info()
    return {
        "uptime": round(time.time() - process.create_time(), 3),
        "memoryUsage": {
            "rss": memory.rss,
            "vms": memory.vms,
            "percent": round(process.memory_percent(), 2),
        },
    }


@router.get("/health")
async def health(ctx: ContextDep) -> ORJSONResponse:
    """Full health report."""
    try:
        database_status, cache_status = await asyncio.gather(
            _probe("database", ctx.db.ping()),
            _probe("redis", ctx.cache.ping()),
        )
        content = {
            "databaseStatus": database_status,
            "cacheStatus": cache_status,
            **process_stats(),
        }
    except (psutil.Error, OSError) as exc:
        logger.exception("Health check failed")
        body = ErrorBody(error="Health check failed", details=str(exc))
        return ORJSONResponse(status_code=500, content=body.model_dump())

    return ORJSONResponse(status_code=200, content=content)
