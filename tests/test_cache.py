import fnmatch
import json

import pytest
from conftest import API
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core import cache


class MemoryRedis:
    """Just enough of redis.asyncio.Redis for the cache helpers."""

    def __init__(self):
        self.store = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value

    async def scan_iter(self, match="*"):
        for key in list(self.store):
            if fnmatch.fnmatch(key, match):
                yield key

    async def delete(self, key):
        return 1 if self.store.pop(key, None) is not None else 0


class DownRedis:
    async def get(self, key):
        raise RedisConnectionError("connection refused")

    async def set(self, key, value, ex=None):
        raise RedisConnectionError("connection refused")

    async def scan_iter(self, match="*"):
        raise RedisConnectionError("connection refused")
        yield

    async def delete(self, key):
        raise RedisConnectionError("connection refused")


@pytest.fixture
def memory_redis(monkeypatch):
    client = MemoryRedis()
    monkeypatch.setattr(cache, "get_redis", lambda: client)
    return client


@pytest.fixture
def down_redis(monkeypatch):
    monkeypatch.setattr(cache, "get_redis", lambda: DownRedis())


async def test_helpers_are_noops_without_redis():
    assert await cache.get_json("k") is None
    await cache.set_json("k", {"a": 1})
    assert await cache.invalidate_prefix("k") == 0


async def test_errors_are_treated_as_misses(down_redis):
    assert await cache.get_json("exercises:list") is None
    await cache.set_json("exercises:list", {"a": 1})
    assert await cache.invalidate_prefix("exercises:") == 0


async def test_unreadable_entry_is_a_miss(memory_redis):
    memory_redis.store["exercises:bad"] = "{not json"
    assert await cache.get_json("exercises:bad") is None


async def test_invalidate_prefix_only_removes_matching_keys(memory_redis):
    await cache.set_json("exercises:a", [1])
    await cache.set_json("exercises:b", [2])
    await cache.set_json("programs:a", [3])
    assert await cache.invalidate_prefix("exercises:") == 2
    assert list(memory_redis.store) == ["programs:a"]


async def test_exercise_list_served_from_cache(client, seeded, auth, memory_redis):
    first = await client.get(f"{API}/exercises", headers=auth["headers"])
    assert first.status_code == 200
    (key,) = [k for k in memory_redis.store if k.startswith("exercises:list")]

    cached = json.loads(memory_redis.store[key])
    cached["meta"]["total"] = 999
    memory_redis.store[key] = json.dumps(cached)

    second = await client.get(f"{API}/exercises", headers=auth["headers"])
    assert second.json()["meta"]["total"] == 999


async def test_exercise_list_survives_redis_outage(client, seeded, auth, down_redis):
    resp = await client.get(f"{API}/exercises", headers=auth["headers"])
    assert resp.status_code == 200
    assert resp.json()["meta"]["total"] == 21
