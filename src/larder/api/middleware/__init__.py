"""Middleware for the Larder API.

- Correlation context and access logging
- CORS for browser clients
"""

from larder.api.middleware.correlation import CorrelationMiddleware
from larder.api.middleware.cors import CORSConfig, add_cors_middleware

__all__ = [
    "CorrelationMiddleware",
    "CORSConfig",
    "add_cors_middleware",
]
