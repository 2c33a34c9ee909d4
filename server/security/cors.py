"""CORS (Cross-Origin Resource Sharing) handling for the documentation assistant API.

The API is called straight from documentation pages on arbitrary hosts, so
every response carries permissive CORS headers, whether or not the request
sent an ``Origin``, and any ``OPTIONS`` request is answered directly.
"""

from fastapi import FastAPI
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]
DEFAULT_ALLOWED_HEADERS = ["Content-Type", "Authorization", "X-Requested-With"]


def get_cors_headers(allowed_origin: str = "*",
                     allowed_methods: Optional[List[str]] = None,
                     allowed_headers: Optional[List[str]] = None) -> Dict[str, str]:
    """Get the CORS headers attached to every response."""
    return {
        "access-control-allow-origin": allowed_origin,
        "access-control-allow-methods": ", ".join(allowed_methods or DEFAULT_ALLOWED_METHODS),
        "access-control-allow-headers": ", ".join(allowed_headers or DEFAULT_ALLOWED_HEADERS),
    }


class PermissiveCORSMiddleware:
    """Adds CORS headers to all responses and short-circuits preflight requests."""

    def __init__(self, app, allowed_origin: str = "*",
                 allowed_methods: Optional[List[str]] = None,
                 allowed_headers: Optional[List[str]] = None):
        self.app = app
        self.headers = [
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, value in get_cors_headers(allowed_origin, allowed_methods, allowed_headers).items()
        ]

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if scope["method"] == "OPTIONS":
            await send({
                "type": "http.response.start",
                "status": 200,
                "headers": [
                    (b"content-type", b"text/plain"),
                    (b"content-length", b"0"),
                    *self.headers,
                ],
            })
            await send({"type": "http.response.body", "body": b""})
            return

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                cors_names = {name for name, _ in self.headers}
                headers = [
                    (name, value) for name, value in message.get("headers", [])
                    if name.lower() not in cors_names
                ]
                message["headers"] = headers + self.headers
            await send(message)

        await self.app(scope, receive, send_wrapper)


def setup_cors(app: FastAPI, allowed_origin: str = "*") -> None:
    """Setup permissive CORS middleware for FastAPI application."""
    app.add_middleware(PermissiveCORSMiddleware, allowed_origin=allowed_origin)
    logger.info(f"CORS configured with origin: {allowed_origin}")
