"""
FastAPI router module for reference data.

Key Endpoints:
- GET /sites, /teams, /groups, /experiences, /contexts: {id, name} lists
  ordered by name, used by the filter panel
- GET /activities: enabled activities only
- GET /agents: active agents with contract and organisation labels,
  filtered by the categorical agent filters
"""

import logging
from typing import List

from fastapi import APIRouter

from wfm_dashboard.api.params import AgentFiltersDep, raise_http_error
from wfm_dashboard.core.dependencies import DBSessionDep
from wfm_dashboard.models.enums import ReferenceTable
from wfm_dashboard.models.schemas import AgentRecord, ReferenceItem
from wfm_dashboard.services.filters import normalize_agent_filters
from wfm_dashboard.services.reference import (
    list_active_agents,
    list_enabled_activities,
    list_reference_items,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _list_table(db, table: ReferenceTable, label: str) -> List[ReferenceItem]:
    try:
        return await list_reference_items(db, table)
    except Exception as e:
        raise_http_error(e, f"Failed to fetch {label}")


@router.get("/sites", response_model=List[ReferenceItem])
async def list_sites(db: DBSessionDep) -> List[ReferenceItem]:
    return await _list_table(db, ReferenceTable.SITE, "sites")


@router.get("/teams", response_model=List[ReferenceItem])
async def list_teams(db: DBSessionDep) -> List[ReferenceItem]:
    return await _list_table(db, ReferenceTable.TEAM, "teams")


@router.get("/groups", response_model=List[ReferenceItem])
async def list_groups(db: DBSessionDep) -> List[ReferenceItem]:
    return await _list_table(db, ReferenceTable.GROUP, "groups")


@router.get("/experiences", response_model=List[ReferenceItem])
async def list_experiences(db: DBSessionDep) -> List[ReferenceItem]:
    return await _list_table(db, ReferenceTable.EXPERIENCE, "experiences")


@router.get("/contexts", response_model=List[ReferenceItem])
async def list_contexts(db: DBSessionDep) -> List[ReferenceItem]:
    return await _list_table(db, ReferenceTable.CONTEXT, "contexts")


@router.get("/activities", response_model=List[ReferenceItem])
async def list_activities(db: DBSessionDep) -> List[ReferenceItem]:
    try:
        return await list_enabled_activities(db)
    except Exception as e:
        raise_http_error(e, "Failed to fetch activities")


@router.get("/agents", response_model=List[AgentRecord])
async def list_agents(db: DBSessionDep, filters: AgentFiltersDep) -> List[AgentRecord]:
    """
    List agents holding a contract active today.

    An unknown contractType is ignored (logged) and the list is not narrowed
    by contract.
    """
    try:
        agent_filter, _ = normalize_agent_filters(filters)
        return await list_active_agents(db, agent_filter)
    except Exception as e:
        raise_http_error(e, "Failed to fetch agents")
