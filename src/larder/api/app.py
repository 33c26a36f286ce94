"""FastAPI application factory for Larder.

Creates the application with:
- Recipe CRUD and cached list endpoints
- Health and Prometheus metrics endpoints
- Lifecycle management for the store and cache connections
- Structured logging with request correlation
- Consistent {error, details} error responses
- ORJSON for fast JSON serialization
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.types import ExceptionHandler

from larder.api.context import AppContext
from larder.api.errors import (
    ApiError,
    api_exception_handler,
    generic_exception_handler,
    request_validation_exception_handler,
)
from larder.api.middleware import CORSConfig, CorrelationMiddleware, add_cors_middleware
from larder.api.routers import health, recipes
from larder.api.routers import metrics as metrics_router
from larder.config import Settings, get_settings
from larder.observability import (
    MetricsMiddleware,
    configure_logging,
    get_metrics,
    log_unhandled_task_errors,
)
from larder.persistence.db import StoreError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    On startup:
    - Configure structured logging
    - Route unhandled task errors to the log
    - Create the store and cache clients unless a context was injected
    - Create the recipes table if it does not exist

    On shutdown:
    - Close the store connection, then the cache connection
    """
    settings: Settings = app.state.settings
    configure_logging(json_format=settings.env != "dev", level=settings.log_level)
    asyncio.get_running_loop().set_exception_handler(log_unhandled_task_errors)

    logger.info(f"Starting Larder ({settings.env})")
    owns_context = getattr(app.state, "context", None) is None
    if owns_context:
        app.state.context = AppContext.from_settings(settings)
        try:
            await app.state.context.db.create_all()
        except StoreError as exc:
            # Requests will fail with 500 until the store is reachable
            logger.error(f"Database connection error: {exc}")
    logger.info("Larder startup complete")

    yield

    logger.info("Shutting down Larder")
    if owns_context:
        await app.state.context.close()
    logger.info("Larder shutdown complete")


def create_app(
    settings: Settings | None = None,
    context: AppContext | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration; loaded from the environment when omitted.
            Loading fails without DATABASE_URL.
        context: Prebuilt store/cache context. When given, the application
            uses it as is and leaves closing it to the caller.
    """
    if settings is None:
        settings = context.settings if context is not None else get_settings()

    app = FastAPI(
        title="Larder",
        description="Recipe API with a cache-aside list layer",
        version="0.1.0",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings
    if context is not None:
        app.state.context = context

    # CorrelationMiddleware is innermost so the request id is set for handlers
    app.add_middleware(CorrelationMiddleware)
    if settings.enable_metrics:
        app.add_middleware(MetricsMiddleware)
    add_cors_middleware(app, CORSConfig.from_settings(settings))

    app.add_exception_handler(ApiError, cast(ExceptionHandler, api_exception_handler))
    app.add_exception_handler(
        RequestValidationError, cast(ExceptionHandler, request_validation_exception_handler)
    )
    app.add_exception_handler(Exception, cast(ExceptionHandler, generic_exception_handler))

    app.include_router(health.router)
    app.include_router(recipes.router)

    if settings.enable_metrics:
        get_metrics()
        app.include_router(metrics_router.router)

    return app
