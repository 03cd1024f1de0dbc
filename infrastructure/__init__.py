# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - External dependency adapters
# PURPOSE: PostgreSQL connection and Redis-backed cache
# ============================================================================
"""
Infrastructure Module

Adapters for the external dependencies of the Webchat API:
- DatabaseConnection: PostgreSQL pool lifecycle and ping
- RedisStore / CacheService: cache backend and facade
"""

from infrastructure.database import (
    ConnectionState,
    DatabaseConnection,
    init_database,
    close_database,
)
from infrastructure.cache import (
    CacheTTL,
    CacheKeys,
    KeyValueStore,
    RedisStore,
    CacheService,
)

__all__ = [
    "ConnectionState",
    "DatabaseConnection",
    "init_database",
    "close_database",
    "CacheTTL",
    "CacheKeys",
    "KeyValueStore",
    "RedisStore",
    "CacheService",
]
