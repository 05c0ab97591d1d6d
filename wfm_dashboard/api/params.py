"""
Query parameters and error translation shared by the report routers.

Every agent-scoped endpoint accepts the same categorical filters
(siteId, contractType, teamId, groupId, experienceId, contextId); date-ranged
endpoints add startDate/endDate, and the per-activity planning reports add
activityId. Dates stay strings here so the filter normalizer can tell an
absent date (default applied) from an unparseable one (400).
"""

import logging
from typing import Annotated, NoReturn, Optional

from fastapi import Depends, HTTPException, Query

from wfm_dashboard.core.exceptions import DashboardError, ValidationError
from wfm_dashboard.services.filters import RawReportFilters

logger = logging.getLogger(__name__)


def get_agent_filters(
    siteId: Optional[int] = Query(default=None),
    contractType: Optional[str] = Query(default=None, description="Contract label: CDI, CDD, Intérim, ..."),
    teamId: Optional[int] = Query(default=None),
    groupId: Optional[int] = Query(default=None),
    experienceId: Optional[int] = Query(default=None),
    contextId: Optional[int] = Query(default=None),
) -> RawReportFilters:
    return RawReportFilters(
        site_id=siteId,
        contract_type=contractType,
        team_id=teamId,
        group_id=groupId,
        experience_id=experienceId,
        context_id=contextId,
    )


def get_report_filters(
    filters: Annotated[RawReportFilters, Depends(get_agent_filters)],
    startDate: Optional[str] = Query(default=None, description="First day, YYYY-MM-DD"),
    endDate: Optional[str] = Query(default=None, description="Last day (inclusive), YYYY-MM-DD"),
) -> RawReportFilters:
    filters.start_date = startDate
    filters.end_date = endDate
    return filters


def get_activity_report_filters(
    filters: Annotated[RawReportFilters, Depends(get_report_filters)],
    activityId: Optional[int] = Query(default=None, description="Restrict assignments to one activity"),
) -> RawReportFilters:
    filters.activity_id = activityId
    return filters


# Usage: async def endpoint(filters: AgentFiltersDep)
AgentFiltersDep = Annotated[RawReportFilters, Depends(get_agent_filters)]

# Usage: async def endpoint(filters: ReportFiltersDep)
ReportFiltersDep = Annotated[RawReportFilters, Depends(get_report_filters)]

# Usage: async def endpoint(filters: ActivityReportFiltersDep)
ActivityReportFiltersDep = Annotated[RawReportFilters, Depends(get_activity_report_filters)]


def raise_http_error(error: Exception, context: str) -> NoReturn:
    """
    Translate a service failure into an HTTPException.

    ValidationError -> 400, StorageError and anything unexpected -> 500.
    """
    if isinstance(error, ValidationError):
        logger.warning(f"{context}: {error.message}")
        raise HTTPException(status_code=400, detail=error.message) from error
    if isinstance(error, DashboardError):
        logger.error(f"{context}: {error.message}")
        raise HTTPException(status_code=500, detail=f"{context}: {error.message}") from error

    logger.exception(context)
    raise HTTPException(status_code=500, detail=f"{context}: {str(error)}") from error
