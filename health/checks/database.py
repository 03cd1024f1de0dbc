# ============================================================================
# DATABASE HEALTH CHECK
# ============================================================================
# STATUS: Infrastructure - Data store probe
# PURPOSE: Data store reachability and latency
# ============================================================================
"""
Database Health Check

Pings the data store and reports latency, database name and the
numeric connection state (0 disconnected, 1 connected, 2 connecting,
3 disconnecting).
"""

import logging
import time

from health.core import (
    DependencyPinger,
    HealthCheckPlugin,
    ProbeResult,
    elapsed_ms,
)
from core.results import error_message

logger = logging.getLogger(__name__)


class DatabaseCheck(HealthCheckPlugin):
    """
    Data store connectivity health check.

    Never raises: a failed ping becomes an unhealthy result.
    """

    name = "database"

    def __init__(self, client: DependencyPinger):
        self.client = client

    async def check(self) -> ProbeResult:
        start = time.monotonic()

        try:
            await self.client.ping()
        except Exception as e:
            logger.error(f"Database health check failed: {e}", exc_info=True)
            return ProbeResult.unhealthy(
                elapsed_ms(start),
                error=error_message(e),
                database=self.client.name,
                readyState=self.client.ready_state,
            )

        return ProbeResult.healthy(
            elapsed_ms(start),
            database=self.client.name,
            readyState=self.client.ready_state,
        )


__all__ = ["DatabaseCheck"]
