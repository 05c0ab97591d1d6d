"""
Workforce Planning Dashboard Backend Package.

FastAPI service layer for the workforce-planning reporting dashboard.
Aggregates agent staffing, scheduling, skills and activity-assignment data
from PostgreSQL and exposes it to the dashboard frontend.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, dependencies and error types
    - models: Pydantic schemas and enums
    - services: Report and aggregation logic
    - sql: Parameterized SQL queries
"""

__version__ = "1.0.0"
