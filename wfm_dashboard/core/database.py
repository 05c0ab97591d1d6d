"""
Async PostgreSQL connection pool module.

This module provides an async PostgreSQL connection pool using asyncpg and the
single read boundary used by every report service.

Key Components:
- Global connection pool (_pool), owned by the application lifespan
- init_db(): Initialize the connection pool at application startup
- get_db_pool(): Get the pool instance (initializes if needed)
- close_db(): Gracefully close the pool at application shutdown
- fetch_records(): Run a read query on a request-scoped connection and
  translate driver failures into StorageError
- ping(): Round-trip check used by the health endpoint

Business logic never touches the pool directly: routers acquire a connection
per request (see core/dependencies.py) and hand it to the services, which
release it on every exit path through `async with pool.acquire()`.

Connection Pool Configuration (from Settings):
- min_size: db_pool_min_size (default 2)
- max_size: db_pool_max_size (default 10)
- command_timeout: db_command_timeout (default 60 seconds)

Usage:
    # At application startup (in FastAPI lifespan)
    await init_db()

    # In services
    rows = await fetch_records(conn, "SELECT id, name FROM site WHERE id = $1", site_id)

    # At application shutdown
    await close_db()
"""

import asyncio
import logging
from typing import Any, List, Optional

import asyncpg
from asyncpg import Pool

from wfm_dashboard.core.config import get_settings
from wfm_dashboard.core.exceptions import StorageError

logger = logging.getLogger(__name__)


# Failures that mean "the store could not answer": connection refused or lost,
# server-side errors (including syntax errors in a malformed query) and
# command timeouts.
STORAGE_FAILURES = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


# =============================================================================
# Global Pool
# =============================================================================

# None until init_db() is called
_pool: Optional[Pool] = None


# =============================================================================
# Pool Lifecycle Functions
# =============================================================================

async def init_db() -> Pool:
    """
    Initialize the database connection pool.

    Creates an asyncpg pool sized from Settings. Calling it again while a pool
    exists returns the existing pool.

    Returns:
        Pool: The asyncpg connection pool instance.

    Raises:
        asyncpg.PostgresError: If connection to the database fails.
        OSError: If the database host is unreachable.
    """
    global _pool

    if _pool is None:
        settings = get_settings()
        _pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
        )

    return _pool


async def get_db_pool() -> Pool:
    """
    Get the database connection pool, initializing if needed.

    Returns:
        Pool: The asyncpg connection pool instance.

    Raises:
        asyncpg.PostgresError: If connection to the database fails during lazy init.
    """
    global _pool

    if _pool is None:
        await init_db()

    assert _pool is not None, "Pool should be initialized after init_db()"

    return _pool


async def close_db() -> None:
    """
    Close the database connection pool gracefully.

    Idempotent: calling it when no pool exists has no effect. A later
    get_db_pool() call creates a fresh pool.
    """
    global _pool

    if _pool is not None:
        await _pool.close()
        _pool = None


# =============================================================================
# Query Execution Helpers
# =============================================================================

async def fetch_records(
    conn: asyncpg.Connection,
    query: str,
    *args: Any
) -> List[asyncpg.Record]:
    """
    Execute a read query on an acquired connection and return its rows.

    Args:
        conn: Request-scoped connection.
        query: SQL query string with $1, $2, ... placeholders.
        *args: Positional query parameters.

    Returns:
        List of records; each supports key access (row['column']).

    Raises:
        StorageError: If the store is unreachable, times out or rejects the query.
    """
    try:
        return await conn.fetch(query, *args)
    except STORAGE_FAILURES as e:
        logger.error(f"Query failed: {type(e).__name__}: {e}")
        raise StorageError(f"Database query failed: {e}") from e


async def ping() -> bool:
    """
    Check that a connection can be acquired and answers SELECT 1.

    Returns:
        True when the round trip succeeds, False otherwise.
    """
    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            value = await conn.fetchval("SELECT 1")
        return value == 1
    except STORAGE_FAILURES as e:
        logger.warning(f"Database ping failed: {e}")
        return False
