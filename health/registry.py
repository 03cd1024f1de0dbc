# ============================================================================
# HEALTH CHECK REGISTRY
# ============================================================================
# STATUS: Infrastructure - Health check registration
# PURPOSE: Hold the probe instances the aggregator runs
# ============================================================================
"""
Health Check Registry

Ordered collection of probe instances keyed by name. Probes are built
with their collaborators and registered explicitly at startup.

Usage:
    registry = HealthCheckRegistry()
    registry.register(DatabaseCheck(database))
    registry.register(CacheCheck(cache))
"""

import logging
from typing import Dict, Iterable, List, Optional

from health.core import HealthCheckPlugin

logger = logging.getLogger(__name__)


class HealthCheckRegistry:
    """
    Registry for health check plugins.

    Registration order is preserved and used for the ``services`` mapping.
    """

    def __init__(self, checks: Optional[Iterable[HealthCheckPlugin]] = None):
        self._checks: Dict[str, HealthCheckPlugin] = {}
        for check in checks or ():
            self.register(check)

    def register(self, check: HealthCheckPlugin) -> None:
        """
        Register a health check plugin instance.

        A check with the same name replaces the earlier one.
        """
        if check.name in self._checks:
            logger.warning(f"Overwriting health check: {check.name}")

        self._checks[check.name] = check
        logger.debug(f"Registered health check: {check.name}")

    def get(self, name: str) -> Optional[HealthCheckPlugin]:
        """Get health check by name."""
        return self._checks.get(name)

    def get_all(self) -> List[HealthCheckPlugin]:
        """Get all registered checks in registration order."""
        return list(self._checks.values())

    def __len__(self) -> int:
        return len(self._checks)


__all__ = [
    "HealthCheckRegistry",
]
