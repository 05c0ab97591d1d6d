"""
FastAPI router module for planning reports.

Key Endpoints:
- GET /schedule-summary: headcount of the filtered agents
- GET /daily-breakdown: daily planned vs assigned hours and utilization
- GET /activity/repartition: assigned time per (activity, day)
- GET /schedule/repartition: working window per (agent, day)
- GET /agent/occupancy: planned vs assigned hours per agent
- GET /agent/assignments: share of planned time per (agent, activity)
- GET /kpi/agents/max: larger of the scheduled and assigned headcounts

All reports take startDate/endDate plus the categorical agent filters.
Missing dates fall back to the planning defaults from Settings (the KPI uses
its own defaults); an unparseable date or an end before the start is a 400.

The daily breakdown never answers a failure with a bare error: it returns
the empty series shape (data: [], totals 0) with `error` and `message`, so
the dashboard can show "data unavailable" instead of idle days.
"""

import logging
from typing import List

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from wfm_dashboard.api.params import (
    ActivityReportFiltersDep,
    ReportFiltersDep,
    raise_http_error,
)
from wfm_dashboard.core.database import STORAGE_FAILURES, get_db_pool
from wfm_dashboard.core.dependencies import DBSessionDep, SettingsDep
from wfm_dashboard.core.exceptions import DashboardError, StorageError, ValidationError
from wfm_dashboard.models.schemas import (
    ActivityRepartitionRow,
    AgentAssignmentRatioRow,
    AgentCountKpi,
    AgentOccupancyRow,
    DailySeriesErrorResponse,
    DailySeriesResult,
    ScheduleRepartitionRow,
    ScheduleSummary,
)
from wfm_dashboard.services.daily_utilization import compute_daily_utilization
from wfm_dashboard.services.filters import normalize_agent_filters, normalize_filters
from wfm_dashboard.services.planning import (
    get_activity_repartition,
    get_agent_assignment_ratios,
    get_agent_occupancy,
    get_max_agents,
    get_schedule_repartition,
    get_schedule_summary,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Daily Breakdown
# =============================================================================


def _daily_breakdown_failure(status_code: int, error: DashboardError) -> JSONResponse:
    payload = DailySeriesErrorResponse(error=error.error_code, message=error.message)
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode='json'))


@router.get(
    "/daily-breakdown",
    response_model=DailySeriesResult,
    responses={
        400: {"model": DailySeriesErrorResponse, "description": "Invalid date range"},
        500: {"model": DailySeriesErrorResponse, "description": "Data unavailable"},
    },
)
async def daily_breakdown(filters: ReportFiltersDep, settings: SettingsDep):
    """
    Daily planned vs assigned hours for the filtered agents.

    Unknown contractType values are listed in `warnings` and not applied.
    """
    try:
        predicate, warnings = normalize_filters(filters, settings.planning_range_defaults())

        try:
            pool = await get_db_pool()
            async with pool.acquire() as conn:
                return await compute_daily_utilization(conn, predicate, warnings)
        except STORAGE_FAILURES as e:
            raise StorageError(f"Database unavailable: {e}") from e

    except ValidationError as e:
        logger.warning(f"Rejected daily breakdown request: {e.message}")
        return _daily_breakdown_failure(400, e)
    except StorageError as e:
        logger.error(f"Daily breakdown unavailable: {e.message}")
        return _daily_breakdown_failure(500, e)


# =============================================================================
# Other Planning Reports
# =============================================================================


@router.get("/schedule-summary", response_model=ScheduleSummary)
async def schedule_summary(
    db: DBSessionDep,
    settings: SettingsDep,
    filters: ReportFiltersDep,
) -> ScheduleSummary:
    """
    Headcount of the filtered active agents. The date range is validated but
    does not narrow the count.
    """
    try:
        normalize_filters(filters, settings.planning_range_defaults())
        agent_filter, _ = normalize_agent_filters(filters)
        return await get_schedule_summary(db, agent_filter)
    except Exception as e:
        raise_http_error(e, "Failed to fetch schedule summary")


@router.get("/activity/repartition", response_model=List[ActivityRepartitionRow])
async def activity_repartition(
    db: DBSessionDep,
    settings: SettingsDep,
    filters: ReportFiltersDep,
) -> List[ActivityRepartitionRow]:
    try:
        predicate, _ = normalize_filters(filters, settings.planning_range_defaults())
        return await get_activity_repartition(db, predicate)
    except Exception as e:
        raise_http_error(e, "Failed to fetch activities repartition")


@router.get("/schedule/repartition", response_model=List[ScheduleRepartitionRow])
async def schedule_repartition(
    db: DBSessionDep,
    settings: SettingsDep,
    filters: ReportFiltersDep,
) -> List[ScheduleRepartitionRow]:
    try:
        predicate, _ = normalize_filters(filters, settings.planning_range_defaults())
        return await get_schedule_repartition(db, predicate)
    except Exception as e:
        raise_http_error(e, "Failed to fetch schedules repartition")


@router.get("/agent/occupancy", response_model=List[AgentOccupancyRow])
async def agent_occupancy(
    db: DBSessionDep,
    settings: SettingsDep,
    filters: ActivityReportFiltersDep,
) -> List[AgentOccupancyRow]:
    try:
        predicate, _ = normalize_filters(filters, settings.planning_range_defaults())
        return await get_agent_occupancy(db, predicate)
    except Exception as e:
        raise_http_error(e, "Failed to fetch agent occupancy")


@router.get("/agent/assignments", response_model=List[AgentAssignmentRatioRow])
async def agent_assignments(
    db: DBSessionDep,
    settings: SettingsDep,
    filters: ActivityReportFiltersDep,
) -> List[AgentAssignmentRatioRow]:
    try:
        predicate, _ = normalize_filters(filters, settings.planning_range_defaults())
        return await get_agent_assignment_ratios(db, predicate)
    except Exception as e:
        raise_http_error(e, "Failed to fetch activities ratio by agent")


@router.get("/kpi/agents/max", response_model=AgentCountKpi)
async def max_agents_kpi(
    db: DBSessionDep,
    settings: SettingsDep,
    filters: ReportFiltersDep,
) -> AgentCountKpi:
    try:
        predicate, _ = normalize_filters(filters, settings.kpi_range_defaults())
        return await get_max_agents(db, predicate)
    except Exception as e:
        raise_http_error(e, "Failed to fetch KPI")
