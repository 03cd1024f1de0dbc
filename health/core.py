# ============================================================================
# HEALTH CHECK CORE TYPES
# ============================================================================
# STATUS: Infrastructure - Base classes for health checks
# PURPOSE: Probe interface and result types
# ============================================================================
"""
Health Check Core Types

Defines the probe interface and the result types for health checks.

Status:
- healthy: dependency answered correctly
- unhealthy: anything else (error, timeout, wrong answer)

Overall status is healthy only when every probe is healthy.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol

from core.results import error_message


class HealthStatus(str, Enum):
    """Health check status values."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"

    @classmethod
    def aggregate(cls, statuses: Iterable["HealthStatus"]) -> "HealthStatus":
        """Healthy iff every status is healthy (an empty set is healthy)."""
        if all(status == cls.HEALTHY for status in statuses):
            return cls.HEALTHY
        return cls.UNHEALTHY


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def elapsed_ms(start: float) -> int:
    """Whole milliseconds since a time.monotonic() start, never negative."""
    return max(0, int(round((time.monotonic() - start) * 1000)))


def _freeze(value: Any) -> Any:
    """Read-only view of nested mappings."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    return value


def _thaw(value: Any) -> Any:
    """Plain dict copy of a frozen mapping, for JSON encoding."""
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    return value


@dataclass(frozen=True)
class ProbeResult:
    """
    Result from a single dependency probe.

    ``details`` is copied into a read-only mapping (nested mappings
    included), so a returned result cannot change afterwards.
    """
    status: HealthStatus
    response_time_ms: int = 0
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "details", _freeze(self.details))

    @property
    def is_healthy(self) -> bool:
        return self.status == HealthStatus.HEALTHY

    @classmethod
    def healthy(cls, response_time_ms: int = 0, **details) -> "ProbeResult":
        """Create healthy result."""
        return cls(HealthStatus.HEALTHY, response_time_ms, details)

    @classmethod
    def unhealthy(cls, response_time_ms: int = 0, **details) -> "ProbeResult":
        """Create unhealthy result."""
        return cls(HealthStatus.UNHEALTHY, response_time_ms, details)

    @classmethod
    def from_exception(cls, e: BaseException, response_time_ms: int = 0) -> "ProbeResult":
        """Create unhealthy result from exception."""
        return cls.unhealthy(response_time_ms, error=error_message(e))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "status": self.status.value,
            "responseTime": self.response_time_ms,
            "details": _thaw(self.details),
        }


@dataclass(frozen=True)
class MemorySnapshot:
    """Process memory usage in bytes."""
    rss: int = 0
    vms: int = 0
    shared: int = 0
    data: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "rss": self.rss,
            "vms": self.vms,
            "shared": self.shared,
            "data": self.data,
        }


@dataclass(frozen=True)
class OverallHealth:
    """Aggregated result from all dependency probes."""
    status: HealthStatus
    timestamp: str
    uptime_seconds: float
    memory: MemorySnapshot
    services: Dict[str, ProbeResult]

    @property
    def is_healthy(self) -> bool:
        return self.status == HealthStatus.HEALTHY

    def services_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: result.to_dict() for name, result in self.services.items()}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "status": self.status.value,
            "timestamp": self.timestamp,
            "uptime": round(self.uptime_seconds, 3),
            "memory": self.memory.to_dict(),
            "services": self.services_dict(),
        }


class DependencyPinger(Protocol):
    """Data-store client surface needed by the database probe."""

    @property
    def name(self) -> str: ...

    @property
    def ready_state(self) -> int: ...

    async def ping(self) -> Any: ...


class HealthCheckPlugin(ABC):
    """
    Base class for dependency probes.

    Subclass and implement check(). A probe must not raise: failures are
    reported as an unhealthy ProbeResult. The aggregator still guards
    every call in case one does.

    Attributes:
        name: Key under which the result appears in ``services``
        timeout_seconds: Per-probe limit applied by the aggregator
            (None uses the aggregator default)
    """

    name: str = "unnamed"
    timeout_seconds: Optional[float] = None

    @abstractmethod
    async def check(self) -> ProbeResult:
        """
        Execute health check.

        Returns:
            ProbeResult with status, timing and details
        """
        pass


__all__ = [
    "HealthStatus",
    "ProbeResult",
    "MemorySnapshot",
    "OverallHealth",
    "DependencyPinger",
    "HealthCheckPlugin",
    "utc_timestamp",
    "elapsed_ms",
]
