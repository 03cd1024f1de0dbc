# ============================================================================
# HEALTH CHECK MODULE
# ============================================================================
# STATUS: Infrastructure - Health and readiness aggregation
# PURPOSE: Kubernetes probes and dependency health monitoring
# ============================================================================
"""
Health Check Module

Dependency health for the Webchat API:
- /health/live: Process alive (instant, no dependency calls)
- /health/ready: Ready to serve traffic (all probes healthy)
- /health: Overall status with process metrics, 200 or 503

Architecture:
- HealthCheckPlugin: Base class for probes
- HealthCheckRegistry: Probe instances by name
- HealthAggregator: Concurrent execution with per-probe timeouts
- health_router: FastAPI endpoints

Usage:
    from health import HealthAggregator, HealthCheckRegistry, health_router
    from health.checks import DatabaseCheck, CacheCheck

    registry = HealthCheckRegistry([DatabaseCheck(db), CacheCheck(cache)])
    set_health_services(HealthAggregator(registry))
    app.include_router(health_router)
"""

from health.core import (
    HealthStatus,
    ProbeResult,
    MemorySnapshot,
    OverallHealth,
    DependencyPinger,
    HealthCheckPlugin,
)
from health.registry import HealthCheckRegistry
from health.process import ProcessMetrics
from health.aggregator import HealthAggregator
from health.router import health_router, set_health_services

__all__ = [
    # Core types
    "HealthStatus",
    "ProbeResult",
    "MemorySnapshot",
    "OverallHealth",
    "DependencyPinger",
    "HealthCheckPlugin",
    # Registry
    "HealthCheckRegistry",
    # Execution
    "ProcessMetrics",
    "HealthAggregator",
    # Router
    "health_router",
    "set_health_services",
]
