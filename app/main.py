"""FastAPI application factory and lifespan."""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text

from app.api.v1 import api_router
from app.core import cache
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    unhandled_exception_handler,
)
from app.core.rate_limit import limiter, rate_limit_exceeded_handler
from app.db.session import engine

settings = get_settings()
configure_logging(settings)
logger = logging.getLogger("app")

STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: log config; shutdown: release DB pool and Redis connection."""
    # Schema is managed by Alembic (alembic upgrade head)
    logger.info(
        "%s %s starting (%s, redis %s)",
        settings.app_name,
        settings.app_version,
        settings.environment,
        "enabled" if settings.redis_enabled else "disabled",
    )
    yield
    await cache.close_redis()
    await engine.dispose()
    logger.info("Shutdown complete")


def _cors_origins() -> list[str]:
    # CORS: allow everything in debug, localhost in dev; in production use CORS_ORIGINS env (comma-separated)
    if settings.debug:
        return ["*"]
    configured = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    if settings.environment == "development":
        return ["http://localhost:3000", "http://127.0.0.1:3000", *configured]
    return configured or [settings.frontend_url]


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Last added runs first: logging wraps everything, CORS answers preflights before limits
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/", tags=["root"])
    @limiter.exempt
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "health": "/health",
        }

    @app.get("/health", tags=["root"])
    @limiter.exempt
    async def health_check(request: Request):
        """Load-balancer health: DB (and Redis when configured). 503 if either is down."""
        payload: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - STARTED_AT, 1),
            "environment": settings.environment,
        }
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            payload["database"] = "connected"
            payload["redis"] = await cache.ping()
        except Exception as e:
            logger.error("Health check failed: %s", e)
            payload.setdefault("database", "disconnected")
            payload.setdefault("redis", "unknown")
            return JSONResponse(status_code=503, content={"status": "unhealthy", **payload, "error": str(e)})
        return {"status": "healthy", **payload}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
