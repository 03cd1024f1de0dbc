# ============================================================================
# CACHE HEALTH CHECK
# ============================================================================
# STATUS: Infrastructure - Cache round-trip probe
# PURPOSE: Verify the cache stores, returns and removes a value
# ============================================================================
"""
Cache Health Check

Runs set -> get -> has -> delete on a throwaway key, strictly in that
order. Healthy only when the value read back equals the value written
and the key is reported present.
"""

import logging
import time
from typing import Any, Dict, Optional

from core.config import HealthDefaults, get_defaults
from core.results import error_message
from health.core import HealthCheckPlugin, ProbeResult, elapsed_ms

logger = logging.getLogger(__name__)


class CacheCheck(HealthCheckPlugin):
    """
    Cache round-trip health check.

    Works against the CacheService facade (or anything with the same
    async set/get/has/delete methods).
    """

    name = "cache"

    def __init__(self, cache: Any, config: Optional[HealthDefaults] = None):
        self.cache = cache
        self.config = config or get_defaults().health

    def _probe_key(self) -> str:
        return f"health_check_{time.time_ns()}"

    async def check(self) -> ProbeResult:
        start = time.monotonic()
        key = self._probe_key()
        expected = self.config.cache_probe_value
        operations: Dict[str, bool] = {}

        try:
            await self.cache.set(key, expected, self.config.cache_probe_ttl_seconds)
            operations["set"] = True

            value = await self.cache.get(key)
            operations["get"] = value == expected

            operations["has"] = bool(await self.cache.has(key))

            await self.cache.delete(key)
            operations["delete"] = True

        except Exception as e:
            logger.error(f"Cache health check failed: {e}", exc_info=True)
            return ProbeResult.unhealthy(
                elapsed_ms(start),
                error=error_message(e),
                operations=operations,
            )

        if operations["get"] and operations["has"]:
            return ProbeResult.healthy(elapsed_ms(start), operations=operations)

        logger.warning(f"Cache health check inconsistent: {operations}")
        return ProbeResult.unhealthy(elapsed_ms(start), operations=operations)


__all__ = ["CacheCheck"]
