# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# STATUS: Infrastructure - FastAPI health check endpoints
# PURPOSE: Kubernetes probes and health monitoring endpoints
# ============================================================================
"""
Health Check Router

Endpoints:
    GET /health          - Overall health of all dependencies.
                           200 when every probe is healthy, 503 otherwise.

    GET /health/database - Data store probe only (always 200; the caller
                           reads ``status``).

    GET /health/cache    - Cache probe only (always 200).

    GET /health/live     - Liveness probe. Never touches dependencies.
                           Kubernetes uses this to restart dead containers.

    GET /health/ready    - Readiness probe ("ready" / "not ready", always 200).
                           Kubernetes uses this to route traffic.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from health.aggregator import HealthAggregator
from health.core import HealthStatus, ProbeResult, utc_timestamp
from health.schemas import (
    ComponentHealthResponse,
    LivenessResponse,
    OverallHealthResponse,
    ReadinessResponse,
)

health_router = APIRouter(prefix="/health", tags=["Health"])


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================
# Set by the main app at startup

_aggregator: Optional[HealthAggregator] = None


def set_health_services(aggregator: Optional[HealthAggregator]) -> None:
    """Set the aggregator instance used by the health endpoints."""
    global _aggregator
    _aggregator = aggregator


def get_aggregator() -> HealthAggregator:
    if _aggregator is None:
        raise HTTPException(500, "Health services not initialized")
    return _aggregator


def _status_to_http_code(status: HealthStatus) -> int:
    """Map health status to HTTP status code."""
    return 200 if status == HealthStatus.HEALTHY else 503


def _component_body(component: str, result: Optional[ProbeResult]) -> dict:
    if result is None:
        raise HTTPException(404, f"Health check not registered: {component}")
    return {"component": component, **result.to_dict()}


# ============================================================================
# OVERALL HEALTH
# ============================================================================

@health_router.get(
    "",
    response_model=OverallHealthResponse,
    responses={503: {"model": OverallHealthResponse, "description": "Dependency unhealthy"}},
)
async def overall_health(aggregator: HealthAggregator = Depends(get_aggregator)):
    """
    Overall health check.

    Returns:
        200: All dependencies healthy
        503: At least one dependency unhealthy
    """
    health = await aggregator.get_overall_health()
    status_code = _status_to_http_code(health.status)

    return JSONResponse(
        status_code=status_code,
        content={"statusCode": status_code, **health.to_dict()},
    )


# ============================================================================
# COMPONENT CHECKS
# ============================================================================

@health_router.get("/database", response_model=ComponentHealthResponse)
async def database_health(aggregator: HealthAggregator = Depends(get_aggregator)):
    """Data store health only."""
    return _component_body("database", await aggregator.check("database"))


@health_router.get("/cache", response_model=ComponentHealthResponse)
async def cache_health(aggregator: HealthAggregator = Depends(get_aggregator)):
    """Cache health only."""
    return _component_body("cache", await aggregator.check("cache"))


# ============================================================================
# LIVENESS PROBE
# ============================================================================

@health_router.get("/live", response_model=LivenessResponse)
async def liveness_probe():
    """
    Kubernetes liveness probe.

    No external checks - just confirms the process is responsive.
    """
    return {"status": "alive", "timestamp": utc_timestamp()}


# ============================================================================
# READINESS PROBE
# ============================================================================

@health_router.get("/ready", response_model=ReadinessResponse)
async def readiness_probe(aggregator: HealthAggregator = Depends(get_aggregator)):
    """
    Kubernetes readiness probe.

    Reports whether every dependency is healthy. Uptime and memory are
    left out of this response.
    """
    health = await aggregator.get_overall_health()

    return {
        "status": "ready" if health.is_healthy else "not ready",
        "timestamp": health.timestamp,
        "services": health.services_dict(),
    }


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "health_router",
    "set_health_services",
    "get_aggregator",
]
