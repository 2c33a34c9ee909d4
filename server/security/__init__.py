"""Security package for the documentation assistant API."""

from .cors import (
    setup_cors,
    get_cors_headers,
    PermissiveCORSMiddleware,
    DEFAULT_ALLOWED_METHODS,
    DEFAULT_ALLOWED_HEADERS
)

__all__ = [
    "setup_cors",
    "get_cors_headers",
    "PermissiveCORSMiddleware",
    "DEFAULT_ALLOWED_METHODS",
    "DEFAULT_ALLOWED_HEADERS"
]
