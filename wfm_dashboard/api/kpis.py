"""
FastAPI router module for the home-page headcount KPIs.

Key Endpoints:
- GET /kpis/agents: {totalAgents}, agents with a contract active today
- GET /kpis/sites: {totalSites}, distinct sites of those agents
- GET /kpis/teams: {totalTeams}, distinct teams of those agents
- GET /kpis/activities: {totalActivities}, enabled activities
"""

from fastapi import APIRouter

from wfm_dashboard.api.params import raise_http_error
from wfm_dashboard.core.dependencies import DBSessionDep
from wfm_dashboard.models.schemas import (
    ActivityCountKpi,
    AgentCountKpi,
    SiteCountKpi,
    TeamCountKpi,
)
from wfm_dashboard.services.reference import (
    count_active_agents,
    count_active_sites,
    count_active_teams,
    count_enabled_activities,
)

router = APIRouter()


@router.get("/agents", response_model=AgentCountKpi)
async def get_agents_kpi(db: DBSessionDep) -> AgentCountKpi:
    try:
        return await count_active_agents(db)
    except Exception as e:
        raise_http_error(e, "Failed to fetch agents")


@router.get("/sites", response_model=SiteCountKpi)
async def get_sites_kpi(db: DBSessionDep) -> SiteCountKpi:
    try:
        return await count_active_sites(db)
    except Exception as e:
        raise_http_error(e, "Failed to fetch sites")


@router.get("/teams", response_model=TeamCountKpi)
async def get_teams_kpi(db: DBSessionDep) -> TeamCountKpi:
    try:
        return await count_active_teams(db)
    except Exception as e:
        raise_http_error(e, "Failed to fetch teams")


@router.get("/activities", response_model=ActivityCountKpi)
async def get_activities_kpi(db: DBSessionDep) -> ActivityCountKpi:
    try:
        return await count_enabled_activities(db)
    except Exception as e:
        raise_http_error(e, "Failed to fetch activities")
