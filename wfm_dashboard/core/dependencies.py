"""
FastAPI dependency injection module for the workforce dashboard backend.

Key Dependencies Provided:
- get_db_session: Async generator yielding a request-scoped database connection
- get_settings_dependency: Returns the cached Settings singleton
- SettingsDep: Type alias for injecting Settings into endpoints
- DBSessionDep: Type alias for injecting database connections into endpoints

The connection is acquired when the request starts and released back to the
pool when the endpoint returns or raises, so services never manage the pool
themselves.

Usage:
    @router.get("/sites")
    async def list_sites(db: DBSessionDep) -> List[ReferenceItem]:
        return await fetch_reference_items(db, ReferenceTable.SITE)

Tests swap both dependencies through app.dependency_overrides.
"""

from typing import AsyncGenerator, Annotated

from asyncpg import Connection
from fastapi import Depends

from wfm_dashboard.core.config import Settings, get_settings
from wfm_dashboard.core.database import STORAGE_FAILURES, get_db_pool
from wfm_dashboard.core.exceptions import StorageError


# =============================================================================
# Database Session Dependency
# =============================================================================

async def get_db_session() -> AsyncGenerator[Connection, None]:
    """
    Yield an async database connection from the pool.

    Yields:
        asyncpg.Connection: An active database connection from the pool.

    Raises:
        StorageError: If the pool cannot be created or no connection can be
            acquired.
    """
    try:
        pool = await get_db_pool()
        connection = await pool.acquire()
    except STORAGE_FAILURES as e:
        raise StorageError(f"Database unavailable: {e}") from e

    try:
        yield connection
    finally:
        await pool.release(connection)


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    Thin wrapper around get_settings() so tests can override it:

        app.dependency_overrides[get_settings_dependency] = lambda: test_settings
    """
    return get_settings()


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

# Usage: async def endpoint(settings: SettingsDep)
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

# Usage: async def endpoint(db: DBSessionDep)
DBSessionDep = Annotated[Connection, Depends(get_db_session)]
