"""HTTP middleware: access logging, security headers, and the catch-all error handler."""

from __future__ import annotations

import logging
import time

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.core.config import get_settings
from app.core.rate_limit import get_client_ip

logger = logging.getLogger("app.access")
error_logger = logging.getLogger("app.errors")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": (
        "default-src 'self'; style-src 'self' 'unsafe-inline'; "
        "script-src 'self'; img-src 'self' data: https:"
    ),
}
# Swagger UI loads its assets from a CDN
DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One line per request: method, path, status, duration."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s %.1fms - %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            get_client_ip(request),
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            if header == "Content-Security-Policy" and request.url.path.startswith(DOCS_PATHS):
                continue
            response.headers.setdefault(header, value)
        return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log and hide internals; debug mode echoes the error string."""
    error_logger.exception(
        "%s - %s %s - IP: %s", exc, request.method, request.url.path, get_client_ip(request)
    )
    content: dict = {"detail": "Internal server error"}
    if get_settings().debug:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)
