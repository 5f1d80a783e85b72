"""Request rate limiting (slowapi). Redis-backed when REDIS_URL is set, else in-memory."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from app.core.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def get_client_ip(request: Request) -> str:
    """Client IP, honouring proxy headers (Vercel / Render / Cloudflare)."""
    return (
        request.headers.get("CF-Connecting-IP")
        or request.headers.get("X-Real-IP")
        or (request.headers.get("X-Forwarded-For") or "").split(",")[0].strip()
        or (request.client.host if request.client else "unknown")
    )


if not settings.redis_enabled:
    logger.warning(
        "Rate limiter: Redis unavailable, using in-memory storage. "
        "Limits are not shared across instances."
    )

limiter = Limiter(
    key_func=get_client_ip,
    default_limits=[settings.rate_limit_standard],
    storage_uri=settings.redis_url or "memory://",
    enabled=settings.rate_limit_enabled,
)

AUTH_LIMIT_MESSAGE = "Too many login attempts. Please try again in an hour."
STANDARD_LIMIT_MESSAGE = "Too many requests, please try again later."


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 with a message specific to the limit that tripped."""
    detail = AUTH_LIMIT_MESSAGE if "/auth/" in request.url.path else STANDARD_LIMIT_MESSAGE
    logger.warning("Rate limit hit: %s %s - IP: %s", request.method, request.url.path, get_client_ip(request))
    return JSONResponse(status_code=429, content={"detail": detail})
