# ============================================================================
# HEALTH AGGREGATOR
# ============================================================================
# STATUS: Infrastructure - Concurrent probe execution
# PURPOSE: Run probes with timeouts and fold them into one verdict
# ============================================================================
"""
Health Aggregator

Runs every registered probe concurrently, each once per call and each
behind its own timeout and exception guard, then combines the results:

- status: healthy iff every probe is healthy
- timestamp, uptime, memory: descriptive metadata only

A probe that hangs or raises is reported as unhealthy; it never aborts
the aggregation.
"""

import asyncio
import time
from typing import Dict, Optional

from core.config import HealthDefaults, get_defaults
from core.logging import ComponentType, get_logger
from health.core import (
    HealthCheckPlugin,
    HealthStatus,
    OverallHealth,
    ProbeResult,
    elapsed_ms,
    utc_timestamp,
)
from health.process import ProcessMetrics
from health.registry import HealthCheckRegistry

logger = get_logger(__name__, ComponentType.HEALTH)


class HealthAggregator:
    """
    Combines dependency probes into an OverallHealth.

    Holds no per-request state; every call builds a fresh result.
    """

    def __init__(
        self,
        registry: HealthCheckRegistry,
        metrics: Optional[ProcessMetrics] = None,
        config: Optional[HealthDefaults] = None,
    ):
        """
        Initialize aggregator.

        Args:
            registry: Probes to run
            metrics: Process metrics source (current process if None)
            config: Health defaults (probe timeout)
        """
        self.registry = registry
        self.metrics = metrics or ProcessMetrics()
        self.config = config or get_defaults().health

    async def get_overall_health(self) -> OverallHealth:
        """Run all probes and build the overall verdict."""
        checks = self.registry.get_all()

        results = await asyncio.gather(*(self._execute_check(check) for check in checks))
        services: Dict[str, ProbeResult] = {
            check.name: result for check, result in zip(checks, results)
        }

        status = HealthStatus.aggregate(r.status for r in services.values())
        if status != HealthStatus.HEALTHY:
            failing = [name for name, r in services.items() if not r.is_healthy]
            logger.warning(f"Health check unhealthy: {', '.join(failing)}")

        return OverallHealth(
            status=status,
            timestamp=utc_timestamp(),
            uptime_seconds=self.metrics.uptime_seconds(),
            memory=self.metrics.memory(),
            services=services,
        )

    async def check(self, name: str) -> Optional[ProbeResult]:
        """Run a single probe by name; None if not registered."""
        check = self.registry.get(name)
        if check is None:
            return None
        return await self._execute_check(check)

    async def _execute_check(self, check: HealthCheckPlugin) -> ProbeResult:
        """Execute a single check with timeout."""
        timeout = check.timeout_seconds or self.config.probe_timeout_seconds
        start = time.monotonic()

        # Errors raised by the check are turned into results inside the
        # timed call, so a TimeoutError here always means the limit expired.
        try:
            result = await asyncio.wait_for(self._run_guarded(check, start), timeout=timeout)

        except asyncio.TimeoutError:
            logger.warning(f"Health check {check.name} timed out after {timeout}s")
            return ProbeResult.unhealthy(
                elapsed_ms(start),
                error=f"Timeout after {timeout}s",
            )

        logger.debug(
            f"Health check {check.name}: {result.status.value} "
            f"({result.response_time_ms}ms)"
        )
        return result

    async def _run_guarded(self, check: HealthCheckPlugin, start: float) -> ProbeResult:
        try:
            return await check.check()
        except Exception as e:
            logger.error(f"Health check {check.name} raised: {e}", exc_info=True)
            return ProbeResult.from_exception(e, elapsed_ms(start))


__all__ = [
    "HealthAggregator",
]
