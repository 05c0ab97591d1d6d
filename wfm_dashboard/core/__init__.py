"""
Core infrastructure package for the FastAPI backend.

Provides:
- Configuration management via pydantic-settings
- Async PostgreSQL connectivity via asyncpg
- FastAPI dependency injection utilities
- The ValidationError / StorageError taxonomy

This module re-exports key components from submodules so callers can write:

    from wfm_dashboard.core import get_settings, DBSessionDep, StorageError
"""

# =============================================================================
# Re-exports from wfm_dashboard.core.config
# =============================================================================
from wfm_dashboard.core.config import Settings, get_settings

# =============================================================================
# Re-exports from wfm_dashboard.core.exceptions
# =============================================================================
from wfm_dashboard.core.exceptions import DashboardError, ValidationError, StorageError

# =============================================================================
# Re-exports from wfm_dashboard.core.database
# =============================================================================
from wfm_dashboard.core.database import init_db, close_db, get_db_pool, fetch_records, ping

# =============================================================================
# Re-exports from wfm_dashboard.core.dependencies
# =============================================================================
from wfm_dashboard.core.dependencies import (
    get_db_session,
    get_settings_dependency,
    SettingsDep,
    DBSessionDep,
)

__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Error taxonomy (from exceptions.py)
    'DashboardError',
    'ValidationError',
    'StorageError',
    # Database pool lifecycle and reads (from database.py)
    'init_db',
    'close_db',
    'get_db_pool',
    'fetch_records',
    'ping',
    # FastAPI dependency injection (from dependencies.py)
    'get_db_session',
    'get_settings_dependency',
    'SettingsDep',
    'DBSessionDep',
]
