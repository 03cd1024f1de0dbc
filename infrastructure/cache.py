# ============================================================================
# CACHE
# ============================================================================
# STATUS: Infrastructure - Cache backend and failure-containing facade
# PURPOSE: Key/value caching for application features and health probes
# ============================================================================
"""
Cache

Two layers:

- ``RedisStore``: JSON values in Redis under a key prefix (redis.asyncio).
- ``CacheService``: the facade application code talks to. Backend
  failures never escape set/get/delete/has; they are logged and turned
  into safe defaults. ``clear`` is the exception and re-raises.

Usage:
    store = RedisStore.from_url("redis://localhost:6379/0")
    cache = CacheService(store)

    await cache.set(CacheKeys.user_profile(user_id), profile, ttl=CacheTTL.USER)
    profile = await cache.get(CacheKeys.user_profile(user_id))
"""

import json
from typing import Any, Awaitable, Callable, Optional, Protocol

import redis.asyncio as redis

from core.config import CacheDefaults, get_defaults
from core.logging import ComponentType, get_logger
from core.results import Outcome, attempt

logger = get_logger(__name__, ComponentType.CACHE)


class CacheTTL:
    """TTL presets in seconds."""
    SHORT = 300       # frequently changing data
    MEDIUM = 3600     # default for most data
    LONG = 86400      # static or rarely changing data
    USER = 1800       # user-specific data
    QUERY = 900       # search/filter results


class CacheKeys:
    """Key builders for application cache entries."""
    USER_PROFILE = "user:profile:"
    GROUP_INFO = "group:info:"
    USER_GROUPS = "user:groups:"
    MESSAGE_COUNT = "message:count:"

    @staticmethod
    def user_profile(user_id: str) -> str:
        return f"{CacheKeys.USER_PROFILE}{user_id}"

    @staticmethod
    def group_info(group_id: str) -> str:
        return f"{CacheKeys.GROUP_INFO}{group_id}"

    @staticmethod
    def user_groups(user_id: str) -> str:
        return f"{CacheKeys.USER_GROUPS}{user_id}"

    @staticmethod
    def message_count(conversation_id: str) -> str:
        return f"{CacheKeys.MESSAGE_COUNT}{conversation_id}"


class KeyValueStore(Protocol):
    """Backend contract consumed by CacheService. Any call may raise."""

    async def get(self, key: str) -> Any: ...

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def clear(self) -> None: ...


# ============================================================================
# REDIS BACKEND
# ============================================================================

class RedisStore:
    """
    Redis-backed KeyValueStore.

    Values are JSON encoded. Keys are namespaced with ``key_prefix`` and
    ``clear`` only removes keys under that prefix.
    """

    SCAN_BATCH = 500

    def __init__(self, client: redis.Redis, key_prefix: str = "webchat:"):
        self._client = client
        self._prefix = key_prefix

    @classmethod
    def from_url(
        cls,
        url: str,
        key_prefix: str = "webchat:",
        socket_timeout: float = 5.0,
    ) -> "RedisStore":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )
        return cls(client, key_prefix)

    @classmethod
    def from_config(cls, config: Optional[CacheDefaults] = None) -> "RedisStore":
        config = config or get_defaults().cache
        return cls.from_url(
            config.redis_url,
            key_prefix=config.key_prefix,
            socket_timeout=config.socket_timeout_seconds,
        )

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> Any:
        raw = await self._client.get(self._key(key))
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        data = json.dumps(value)
        if ttl_seconds and ttl_seconds > 0:
            await self._client.set(self._key(key), data, ex=ttl_seconds)
        else:
            await self._client.set(self._key(key), data)

    async def delete(self, key: str) -> None:
        await self._client.delete(self._key(key))

    async def clear(self) -> None:
        batch = []
        async for key in self._client.scan_iter(match=f"{self._prefix}*", count=self.SCAN_BATCH):
            batch.append(key)
            if len(batch) >= self.SCAN_BATCH:
                await self._client.delete(*batch)
                batch = []
        if batch:
            await self._client.delete(*batch)

    async def close(self) -> None:
        await self._client.aclose()


# ============================================================================
# FACADE
# ============================================================================

class CacheService:
    """
    Failure-containing cache facade.

    set/get/delete/has never raise; clear re-raises after logging.
    """

    def __init__(self, store: KeyValueStore, config: Optional[CacheDefaults] = None):
        self._store = store
        self._config = config or get_defaults().cache

    @property
    def default_ttl(self) -> int:
        return self._config.ttl_seconds

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store a value. Failures are logged, never raised."""
        ttl_seconds = self.default_ttl if ttl is None else ttl
        outcome = await attempt(self._store.set(key, value, ttl_seconds))
        if not outcome.ok:
            logger.error(f"Cache set failed for key={key}: {outcome.error}")

    async def get(self, key: str) -> Any:
        """Stored value, or None when absent or unreadable. Falsy values are kept."""
        outcome = await self._read(key)
        if not outcome.ok:
            return None
        return outcome.value

    async def delete(self, key: str) -> bool:
        """True when the backend delete succeeded (absent keys included)."""
        outcome = await attempt(self._store.delete(key))
        if not outcome.ok:
            logger.error(f"Cache delete failed for key={key}: {outcome.error}")
            return False
        return True

    async def has(self, key: str) -> bool:
        """True when a non-None value is stored under key."""
        outcome = await self._read(key)
        return outcome.ok and outcome.value is not None

    async def clear(self) -> None:
        """Reset the whole cache. Unlike the other operations, failures propagate."""
        outcome = await attempt(self._store.clear())
        if not outcome.ok:
            logger.error(f"Cache clear failed: {outcome.error}")
            raise outcome.error
        logger.info("Cache cleared")

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
        ttl: Optional[int] = None,
    ) -> Any:
        """
        Read-through helper.

        Returns the cached value when present; otherwise awaits ``factory``,
        caches a non-None result and returns it. Factory errors propagate.
        """
        outcome = await self._read(key)
        if outcome.ok and outcome.value is not None:
            logger.debug(f"Cache HIT: {key}")
            return outcome.value

        logger.debug(f"Cache MISS: {key}")
        value = await factory()
        if value is not None:
            await self.set(key, value, ttl)
        return value

    async def _read(self, key: str) -> Outcome[Any]:
        outcome = await attempt(self._store.get(key))
        if not outcome.ok:
            logger.error(f"Cache get failed for key={key}: {outcome.error}")
        return outcome


__all__ = [
    "CacheTTL",
    "CacheKeys",
    "KeyValueStore",
    "RedisStore",
    "CacheService",
]
