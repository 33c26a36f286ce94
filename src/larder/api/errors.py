"""Error responses for the Larder API.

Every error leaves the service as ``{"error": str, "details": str}``:
- ValidationError: malformed identifier or body (400)
- NotFoundError: no recipe for the identifier (404)
- DependencyError: store unreachable or query failure (500)
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorBody(BaseModel):
    """Shared error payload."""

    model_config = {"extra": "forbid"}

    error: str
    details: str = ""


class ApiError(HTTPException):
    """Base exception for API errors."""

    def __init__(self, status_code: int, error: str, details: str = ""):
        self.error = error
        self.details = details
        super().__init__(status_code=status_code, detail=error)

    def to_body(self) -> ErrorBody:
        return ErrorBody(error=self.error, details=self.details)


class ValidationError(ApiError):
    """Malformed identifier or request body (400)."""

    def __init__(self, error: str, details: str = ""):
        super().__init__(status_code=400, error=error, details=details)


class NotFoundError(ApiError):
    """Resource not found (404)."""

    def __init__(self, resource_type: str, identifier: str):
        super().__init__(
            status_code=404,
            error=f"{resource_type} not found",
            details=f"No {resource_type.lower()} with id '{identifier}'",
        )


class DependencyError(ApiError):
    """Backing store failure (500)."""

    def __init__(self, error: str, details: str = ""):
        super().__init__(status_code=500, error=error, details=details)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}" if loc else err.get("msg", ""))
    return "; ".join(parts)


async def api_exception_handler(request: Request, exc: ApiError) -> ORJSONResponse:
    """Exception handler for API errors."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error}: {exc.details}")
    return ORJSONResponse(status_code=exc.status_code, content=exc.to_body().model_dump())


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """Render FastAPI request validation failures as 400."""
    body = ErrorBody(error="Invalid request", details=_format_validation_errors(exc))
    return ORJSONResponse(status_code=400, content=body.model_dump())


async def generic_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Exception handler for unexpected errors."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    body = ErrorBody(error="Internal server error", details=str(exc))
    return ORJSONResponse(status_code=500, content=body.model_dump())
