"""Prometheus scrape endpoint.

Mounted only when ``LARDER_ENABLE_METRICS`` is on.
"""

from __future__ import annotations

from fastapi import APIRouter
from prometheus_client import CONTENT_TYPE_LATEST
from starlette.responses import Response

from larder.observability.metrics import get_metrics

router = APIRouter(tags=["observability"])


@router.get("/metrics", response_class=Response, include_in_schema=False)
async def prometheus_metrics() -> Response:
    """HTTP request and recipe list cache counters in exposition format."""
    return Response(content=get_metrics().generate_latest(), media_type=CONTENT_TYPE_LATEST)
