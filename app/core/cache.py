"""Optional Redis JSON cache for catalog reads.

Every call degrades to a miss / no-op when Redis is disabled or unreachable,
so the cache can never fail a request.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from app.core.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

_client: redis.Redis | None = None


def get_redis() -> redis.Redis | None:
    """Lazily create the shared client; None when REDIS_URL is unset."""
    global _client
    if not settings.redis_enabled:
        return None
    if _client is None:
        _client = redis.from_url(settings.redis_url, decode_responses=True, socket_timeout=2)
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


async def ping() -> str:
    """'disabled', 'connected', or raises if Redis is configured but down."""
    client = get_redis()
    if client is None:
        return "disabled"
    await client.ping()
    return "connected"


async def get_json(key: str) -> Any | None:
    client = get_redis()
    if client is None:
        return None
    try:
        raw = await client.get(key)
    except RedisError as e:
        logger.warning("Cache read failed for %s: %s", key, e)
        return None
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Discarding unreadable cache entry %s", key)
        return None


async def set_json(key: str, value: Any, ttl_seconds: int | None = None) -> None:
    client = get_redis()
    if client is None:
        return
    try:
        await client.set(
            key,
            json.dumps(value, default=str),
            ex=ttl_seconds or settings.catalog_cache_ttl_seconds,
        )
    except RedisError as e:
        logger.warning("Cache write failed for %s: %s", key, e)


async def invalidate_prefix(prefix: str) -> int:
    """Delete every key starting with prefix. Returns number of keys removed."""
    client = get_redis()
    if client is None:
        return 0
    removed = 0
    try:
        async for key in client.scan_iter(match=f"{prefix}*"):
            removed += await client.delete(key)
    except RedisError as e:
        logger.warning("Cache invalidation failed for %s: %s", prefix, e)
    return removed
