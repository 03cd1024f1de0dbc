# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for app, database, cache and health probes
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for the Webchat API runtime.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
from urllib.parse import urlparse

from core.config.validation import get_env, get_env_int, get_env_number


class Environment(str, Enum):
    """Deployment environments."""
    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass(frozen=True)
class AppDefaults:
    """
    Defaults for the HTTP application.

    Controls port, CORS origin and log output.
    """
    environment: str = Environment.DEVELOPMENT.value
    host: str = "0.0.0.0"
    port: int = 3000
    frontend_url: str = "http://localhost:5173"
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION.value

    @classmethod
    def from_env(cls) -> "AppDefaults":
        """Create from environment variables."""
        return cls(
            environment=get_env("APP_ENV", Environment.DEVELOPMENT.value),
            host=get_env("HOST", "0.0.0.0"),
            port=get_env_int("PORT", 3000),
            frontend_url=get_env("FRONTEND_URL", "http://localhost:5173"),
            log_level=get_env("LOG_LEVEL", "INFO"),
            log_json=get_env("LOG_FORMAT", "text").lower() == "json",
        )


@dataclass(frozen=True)
class DatabaseDefaults:
    """
    Defaults for the PostgreSQL connection pool.
    """
    url: str = "postgresql://postgres@localhost:5432/webchat"
    min_pool_size: int = 2
    max_pool_size: int = 10
    connect_timeout_seconds: float = 5.0

    @property
    def database_name(self) -> str:
        """Database name taken from the connection URL path."""
        path = urlparse(self.url).path.lstrip("/")
        return path or "postgres"

    @classmethod
    def from_env(cls) -> "DatabaseDefaults":
        """Create from environment variables."""
        return cls(
            url=get_env("DATABASE_URL", "postgresql://postgres@localhost:5432/webchat"),
            min_pool_size=get_env_int("DB_MIN_POOL_SIZE", 2),
            max_pool_size=get_env_int("DB_MAX_POOL_SIZE", 10),
            connect_timeout_seconds=get_env_number("DB_CONNECT_TIMEOUT_SECONDS", 5.0),
        )


@dataclass(frozen=True)
class CacheDefaults:
    """
    Defaults for the cache facade and its Redis backend.

    ttl_seconds is applied when a caller does not pass an explicit TTL.
    """
    redis_url: str = "redis://localhost:6379/0"
    ttl_seconds: int = 3600  # 1 hour
    key_prefix: str = "webchat:"
    socket_timeout_seconds: float = 5.0

    @classmethod
    def from_env(cls) -> "CacheDefaults":
        """Create from environment variables."""
        return cls(
            redis_url=get_env("REDIS_URL", "redis://localhost:6379/0"),
            ttl_seconds=get_env_int("CACHE_TTL", 3600),
            key_prefix=get_env("CACHE_KEY_PREFIX", "webchat:"),
            socket_timeout_seconds=get_env_number("CACHE_SOCKET_TIMEOUT_SECONDS", 5.0),
        )


@dataclass(frozen=True)
class HealthDefaults:
    """
    Defaults for dependency probes.
    """
    probe_timeout_seconds: float = 5.0
    cache_probe_ttl_seconds: int = 10
    cache_probe_value: str = "test_value"

    @classmethod
    def from_env(cls) -> "HealthDefaults":
        """Create from environment variables."""
        return cls(
            probe_timeout_seconds=get_env_number("HEALTH_PROBE_TIMEOUT", 5.0),
            cache_probe_ttl_seconds=get_env_int("HEALTH_CACHE_PROBE_TTL", 10),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    app: AppDefaults = field(default_factory=AppDefaults)
    database: DatabaseDefaults = field(default_factory=DatabaseDefaults)
    cache: CacheDefaults = field(default_factory=CacheDefaults)
    health: HealthDefaults = field(default_factory=HealthDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            app=AppDefaults.from_env(),
            database=DatabaseDefaults.from_env(),
            cache=CacheDefaults.from_env(),
            health=HealthDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "Environment",
    "AppDefaults",
    "DatabaseDefaults",
    "CacheDefaults",
    "HealthDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
