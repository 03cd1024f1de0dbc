# ============================================================================
# HEALTH SCHEMAS
# ============================================================================
# STATUS: Infrastructure - Response schemas
# PURPOSE: Pydantic models documenting the health endpoint payloads
# ============================================================================
"""
Health Schemas

Response models for the health endpoints. Field names follow the JSON
wire format.
"""

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field

from health.core import HealthStatus


class ProbeResponse(BaseModel):
    """Result of one dependency probe."""
    status: HealthStatus
    responseTime: int = Field(..., ge=0, description="Probe latency in milliseconds")
    details: Dict[str, Any] = Field(default_factory=dict)


class ComponentHealthResponse(ProbeResponse):
    """Single-component probe result."""
    component: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "component": "database",
                    "status": "healthy",
                    "responseTime": 15,
                    "details": {"database": "webchat", "readyState": 1},
                }
            ]
        }
    }


class MemoryResponse(BaseModel):
    rss: int
    vms: int
    shared: int
    data: int


class OverallHealthResponse(BaseModel):
    """Overall health; statusCode mirrors the HTTP status (200 / 503)."""
    statusCode: int
    status: HealthStatus
    timestamp: str
    uptime: float
    memory: MemoryResponse
    services: Dict[str, ProbeResponse]


class LivenessResponse(BaseModel):
    status: Literal["alive"]
    timestamp: str


class ReadinessResponse(BaseModel):
    status: Literal["ready", "not ready"]
    timestamp: str
    services: Dict[str, ProbeResponse]


__all__ = [
    "ProbeResponse",
    "ComponentHealthResponse",
    "MemoryResponse",
    "OverallHealthResponse",
    "LivenessResponse",
    "ReadinessResponse",
]
