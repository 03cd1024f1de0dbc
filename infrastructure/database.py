# ============================================================================
# DATABASE CONNECTION
# ============================================================================
# STATUS: Infrastructure - Async PostgreSQL connection management
# PURPOSE: Connection pool lifecycle and liveness ping for the data store
# ============================================================================
"""
Database Connection

Manages the async PostgreSQL pool (psycopg3 + psycopg_pool) and exposes
the small surface the health probe needs: a ping, the database name and
a numeric connection state.

Connection states:
    0 - disconnected
    1 - connected
    2 - connecting
    3 - disconnecting

Usage:
    from infrastructure.database import init_database

    db = await init_database()
    async with db.pool.connection() as conn:
        await conn.execute("SELECT 1")
"""

from enum import IntEnum
from typing import Optional

from psycopg_pool import AsyncConnectionPool

from core.config import DatabaseDefaults, get_defaults
from core.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.DATABASE)


class ConnectionState(IntEnum):
    """Numeric connection states reported by health checks."""
    DISCONNECTED = 0
    CONNECTED = 1
    CONNECTING = 2
    DISCONNECTING = 3


def _safe_conninfo(conninfo: str) -> str:
    """Strip credentials from a connection string for logging."""
    if "@" in conninfo:
        return conninfo.split("@")[-1]
    if "password=" in conninfo:
        return conninfo.split("password=")[0] + "password=***"
    return conninfo


class DatabaseConnection:
    """
    Owns the connection pool for one PostgreSQL database.

    Satisfies the DependencyPinger protocol used by DatabaseCheck.
    """

    def __init__(self, config: Optional[DatabaseDefaults] = None):
        self.config = config or get_defaults().database
        self._pool: Optional[AsyncConnectionPool] = None
        self._state = ConnectionState.DISCONNECTED

    @property
    def name(self) -> str:
        return self.config.database_name

    @property
    def ready_state(self) -> int:
        return int(self._state)

    @property
    def pool(self) -> AsyncConnectionPool:
        if self._pool is None:
            raise RuntimeError("Database pool not initialized")
        return self._pool

    async def open(self) -> AsyncConnectionPool:
        """Open the pool (idempotent)."""
        if self._pool is not None:
            logger.warning("Pool already initialized, returning existing pool")
            return self._pool

        logger.info(f"Initializing connection pool: {_safe_conninfo(self.config.url)}")
        self._state = ConnectionState.CONNECTING

        pool = AsyncConnectionPool(
            conninfo=self.config.url,
            min_size=self.config.min_pool_size,
            max_size=self.config.max_pool_size,
            timeout=self.config.connect_timeout_seconds,
            open=False,  # opened explicitly below
        )
        try:
            await pool.open()
        except Exception:
            self._state = ConnectionState.DISCONNECTED
            raise

        # Connections are established in the background; the first ping
        # settles the state.
        self._pool = pool
        logger.info(
            f"Connection pool opened (min={self.config.min_pool_size}, "
            f"max={self.config.max_pool_size})"
        )
        return pool

    async def close(self) -> None:
        """Close the pool if open."""
        if self._pool is None:
            return

        self._state = ConnectionState.DISCONNECTING
        try:
            await self._pool.close()
        finally:
            self._pool = None
            self._state = ConnectionState.DISCONNECTED
        logger.info("Connection pool closed")

    async def ping(self) -> None:
        """
        Round-trip a trivial query. Raises on any failure.

        The outcome updates ready_state: connected on success,
        disconnected on failure.
        """
        try:
            async with self.pool.connection(timeout=self.config.connect_timeout_seconds) as conn:
                await conn.execute("SELECT 1")
        except Exception:
            self._state = ConnectionState.DISCONNECTED
            raise
        self._state = ConnectionState.CONNECTED


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

_database: Optional[DatabaseConnection] = None


async def init_database(config: Optional[DatabaseDefaults] = None) -> DatabaseConnection:
    """Create and open the application database connection."""
    global _database
    if _database is None:
        _database = DatabaseConnection(config)
    await _database.open()
    return _database


async def close_database() -> None:
    """Close the application database connection."""
    global _database
    if _database is not None:
        await _database.close()
        _database = None


__all__ = [
    "ConnectionState",
    "DatabaseConnection",
    "init_database",
    "close_database",
]
