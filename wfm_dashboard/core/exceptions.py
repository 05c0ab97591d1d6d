"""
Error taxonomy for the workforce dashboard backend.

- ValidationError: the caller supplied an unusable date range (unparseable
  date, or end date before start date). Surfaced immediately, never retried.
- StorageError: the database was unreachable, timed out, rejected the query,
  or returned rows that do not match the expected shape. Not retried here.

Both derive from DashboardError so routers can catch the family in one place.
"""

from typing import Optional


class DashboardError(Exception):
    """Base class for errors raised by the dashboard services."""

    error_code = "dashboard_error"

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(DashboardError):
    """Raised when report filters cannot be normalized into a valid predicate."""

    error_code = "validation_error"


class StorageError(DashboardError):
    """Raised when the relational store cannot serve a report query."""

    error_code = "storage_error"
