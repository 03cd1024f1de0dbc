# ============================================================================
# CACHE SERVICE TESTS
# ============================================================================
# STATUS: Tests - Cache facade and Redis backend
# PURPOSE: Verify failure containment, falsy round-trips and key handling
# ============================================================================
"""
Cache Service Tests

Tests infrastructure/cache.py:
- CacheService against an in-memory fake store and failing mocks
- RedisStore against a mocked redis.asyncio client

Run with:
    pytest tests/test_cache_service.py -v
"""

import asyncio
import json
import pytest
from unittest.mock import AsyncMock, MagicMock

from core.config import CacheDefaults
from infrastructure.cache import CacheKeys, CacheService, CacheTTL, RedisStore


# ============================================================================
# FIXTURES
# ============================================================================

class FakeStore:
    """Dict-backed KeyValueStore recording the TTL of each write."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ttl_seconds):
        self.data[key] = value
        self.ttls[key] = ttl_seconds

    async def delete(self, key):
        self.data.pop(key, None)

    async def clear(self):
        self.data.clear()


def _make_cache(store=None, ttl=3600):
    return CacheService(store or FakeStore(), CacheDefaults(ttl_seconds=ttl))


def _failing_store(error=None):
    error = error or ConnectionError("redis down")
    store = MagicMock()
    store.get = AsyncMock(side_effect=error)
    store.set = AsyncMock(side_effect=error)
    store.delete = AsyncMock(side_effect=error)
    store.clear = AsyncMock(side_effect=error)
    return store


# ============================================================================
# SET / GET
# ============================================================================

class TestSetGet:
    """set() and get() on a working backend."""

    def test_get_returns_stored_value(self):
        cache = _make_cache()
        asyncio.run(cache.set("user:1", {"name": "An"}))
        assert asyncio.run(cache.get("user:1")) == {"name": "An"}

    def test_get_absent_key_returns_none(self):
        cache = _make_cache()
        assert asyncio.run(cache.get("missing")) is None

    @pytest.mark.parametrize("value", [0, False, "", [], {}])
    def test_falsy_values_are_returned_unchanged(self, value):
        cache = _make_cache()
        asyncio.run(cache.set("k", value))

        result = asyncio.run(cache.get("k"))

        assert result is not None
        assert result == value
        assert type(result) is type(value)

    def test_default_ttl_from_config(self):
        store = FakeStore()
        cache = _make_cache(store, ttl=120)

        asyncio.run(cache.set("k", "v"))

        assert store.ttls["k"] == 120

    def test_explicit_ttl_overrides_default(self):
        store = FakeStore()
        cache = _make_cache(store)

        asyncio.run(cache.set("k", "v", ttl=CacheTTL.SHORT))

        assert store.ttls["k"] == 300

    def test_builtin_default_ttl_is_one_hour(self):
        assert CacheDefaults().ttl_seconds == 3600


# ============================================================================
# DELETE / HAS
# ============================================================================

class TestDeleteHas:
    """delete() and has() semantics."""

    def test_delete_twice_returns_true_both_times(self):
        cache = _make_cache()
        asyncio.run(cache.set("k", "v"))

        assert asyncio.run(cache.delete("k")) is True
        assert asyncio.run(cache.delete("k")) is True
        assert asyncio.run(cache.get("k")) is None

    def test_has_true_for_present_value(self):
        cache = _make_cache()
        asyncio.run(cache.set("k", 0))
        assert asyncio.run(cache.has("k")) is True

    def test_has_false_for_absent_key(self):
        cache = _make_cache()
        assert asyncio.run(cache.has("missing")) is False

    def test_has_false_for_stored_none(self):
        store = FakeStore()
        store.data["k"] = None
        cache = _make_cache(store)
        assert asyncio.run(cache.has("k")) is False


# ============================================================================
# FAILURE CONTAINMENT
# ============================================================================

class TestFailureContainment:
    """Backend failures never escape set/get/delete/has."""

    def test_set_swallows_backend_error(self):
        cache = _make_cache(_failing_store())
        assert asyncio.run(cache.set("k", "v")) is None

    def test_get_returns_none_on_backend_error(self):
        cache = _make_cache(_failing_store())
        assert asyncio.run(cache.get("k")) is None

    def test_has_returns_false_on_backend_error(self):
        cache = _make_cache(_failing_store())
        assert asyncio.run(cache.has("k")) is False

    def test_delete_returns_false_on_backend_error(self):
        cache = _make_cache(_failing_store())
        assert asyncio.run(cache.delete("k")) is False

    def test_unserializable_value_does_not_raise(self):
        store = MagicMock()
        store.set = AsyncMock(side_effect=TypeError("Object of type set is not JSON serializable"))
        cache = _make_cache(store)

        asyncio.run(cache.set("k", {1, 2}))

        store.set.assert_awaited_once()

    def test_failures_are_logged(self, caplog):
        cache = _make_cache(_failing_store())

        with caplog.at_level("ERROR", logger="infrastructure.cache"):
            asyncio.run(cache.get("user:1"))

        assert "Cache get failed for key=user:1" in caplog.text


# ============================================================================
# CLEAR
# ============================================================================

class TestClear:
    """clear() is the only operation that propagates failures."""

    def test_clear_empties_store(self):
        store = FakeStore()
        cache = _make_cache(store)
        asyncio.run(cache.set("a", 1))
        asyncio.run(cache.set("b", 2))

        asyncio.run(cache.clear())

        assert store.data == {}

    def test_clear_reraises_backend_error(self):
        error = ConnectionError("reset refused")
        cache = _make_cache(_failing_store(error))

        with pytest.raises(ConnectionError) as exc_info:
            asyncio.run(cache.clear())

        assert exc_info.value is error


# ============================================================================
# READ-THROUGH
# ============================================================================

class TestGetOrSet:
    """get_or_set() read-through helper."""

    def test_hit_skips_factory(self):
        cache = _make_cache()
        asyncio.run(cache.set("k", "cached"))
        factory = AsyncMock(return_value="fresh")

        assert asyncio.run(cache.get_or_set("k", factory)) == "cached"
        factory.assert_not_awaited()

    def test_miss_calls_factory_and_stores(self):
        store = FakeStore()
        cache = _make_cache(store)
        factory = AsyncMock(return_value=[])

        result = asyncio.run(cache.get_or_set("k", factory, ttl=CacheTTL.QUERY))

        assert result == []
        assert store.data["k"] == []
        assert store.ttls["k"] == 900

    def test_none_result_is_not_cached(self):
        store = FakeStore()
        cache = _make_cache(store)

        result = asyncio.run(cache.get_or_set("k", AsyncMock(return_value=None)))

        assert result is None
        assert "k" not in store.data

    def test_backend_failure_falls_back_to_factory(self):
        cache = _make_cache(_failing_store())

        result = asyncio.run(cache.get_or_set("k", AsyncMock(return_value=42)))

        assert result == 42


# ============================================================================
# KEYS
# ============================================================================

class TestCacheKeys:

    def test_key_builders(self):
        assert CacheKeys.user_profile("u1") == "user:profile:u1"
        assert CacheKeys.group_info("g1") == "group:info:g1"
        assert CacheKeys.user_groups("u1") == "user:groups:u1"
        assert CacheKeys.message_count("c1") == "message:count:c1"


# ============================================================================
# REDIS BACKEND
# ============================================================================

def _redis_client():
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock()
    client.delete = AsyncMock()
    client.aclose = AsyncMock()
    return client


class TestRedisStore:
    """RedisStore over a mocked redis.asyncio client."""

    def test_set_encodes_json_with_prefix_and_ttl(self):
        client = _redis_client()
        store = RedisStore(client, key_prefix="wc:")

        asyncio.run(store.set("k", {"a": 1}, 60))

        client.set.assert_awaited_once_with("wc:k", json.dumps({"a": 1}), ex=60)

    def test_set_without_ttl_has_no_expiry(self):
        client = _redis_client()
        store = RedisStore(client, key_prefix="wc:")

        asyncio.run(store.set("k", "v", 0))

        client.set.assert_awaited_once_with("wc:k", json.dumps("v"))

    def test_get_decodes_json(self):
        client = _redis_client()
        client.get = AsyncMock(return_value="0")
        store = RedisStore(client, key_prefix="wc:")

        assert asyncio.run(store.get("k")) == 0
        client.get.assert_awaited_once_with("wc:k")

    def test_get_missing_returns_none(self):
        store = RedisStore(_redis_client())
        assert asyncio.run(store.get("k")) is None

    def test_delete_uses_prefixed_key(self):
        client = _redis_client()
        store = RedisStore(client, key_prefix="wc:")

        asyncio.run(store.delete("k"))

        client.delete.assert_awaited_once_with("wc:k")

    def test_clear_only_deletes_prefixed_keys(self):
        client = _redis_client()
        scanned = {}

        async def scan_iter(match=None, count=None):
            scanned["match"] = match
            for key in ("wc:a", "wc:b"):
                yield key

        client.scan_iter = scan_iter
        store = RedisStore(client, key_prefix="wc:")

        asyncio.run(store.clear())

        assert scanned["match"] == "wc:*"
        client.delete.assert_awaited_once_with("wc:a", "wc:b")

    def test_clear_with_no_keys_deletes_nothing(self):
        client = _redis_client()

        async def scan_iter(match=None, count=None):
            return
            yield

        client.scan_iter = scan_iter
        store = RedisStore(client)

        asyncio.run(store.clear())

        client.delete.assert_not_awaited()

    def test_facade_over_redis_store_round_trip(self):
        client = _redis_client()
        written = {}

        async def fake_set(key, value, ex=None):
            written[key] = value

        async def fake_get(key):
            return written.get(key)

        client.set = AsyncMock(side_effect=fake_set)
        client.get = AsyncMock(side_effect=fake_get)
        cache = CacheService(RedisStore(client), CacheDefaults())

        asyncio.run(cache.set("flag", False))

        assert asyncio.run(cache.get("flag")) is False
        assert asyncio.run(cache.has("flag")) is True
