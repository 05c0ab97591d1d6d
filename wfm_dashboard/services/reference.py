"""
Reference data and headcount service.

Lookup lists for the filter panel, the active agent listing and the
home-page headcount KPIs. Headcounts only consider agents (role 1) holding a
contract that is active today.
"""

import logging
from typing import List

from asyncpg import Connection

from wfm_dashboard.core.database import fetch_records
from wfm_dashboard.models.enums import ContractNature, ReferenceTable, UNKNOWN_CONTRACT_LABEL
from wfm_dashboard.models.schemas import (
    ActivityCountKpi,
    AgentCountKpi,
    AgentFilter,
    AgentRecord,
    ReferenceItem,
    SiteCountKpi,
    TeamCountKpi,
)
from wfm_dashboard.sql.reference_queries import (
    get_active_agents_query,
    get_activity_count_query,
    get_agent_count_query,
    get_enabled_activities_query,
    get_reference_items_query,
    get_site_count_query,
    get_team_count_query,
)

logger = logging.getLogger(__name__)


async def list_reference_items(conn: Connection, table: ReferenceTable) -> List[ReferenceItem]:
    rows = await fetch_records(conn, get_reference_items_query(table))
    return [ReferenceItem(id=row['id'], name=row['name']) for row in rows]


async def list_enabled_activities(conn: Connection) -> List[ReferenceItem]:
    rows = await fetch_records(conn, get_enabled_activities_query())
    return [ReferenceItem(id=row['id'], name=row['name']) for row in rows]


def contract_label(code) -> str:
    """Label of a contract nature code, 'Inconnu' when the code is unknown."""
    nature = ContractNature.from_code(code)
    return nature.value if nature is not None else UNKNOWN_CONTRACT_LABEL


async def list_active_agents(conn: Connection, filters: AgentFilter) -> List[AgentRecord]:
    """
    Active agents matching the filters, one row per active contract.
    """
    query, params = get_active_agents_query(filters)
    rows = await fetch_records(conn, query, *params)

    agents = [
        AgentRecord(
            id=row['id'],
            contractType=contract_label(row['contract_nature']),
            contract=row['contract'],
            departureDate=row['departure_date'],
            email=row['email'],
            firstName=row['first_name'],
            lastName=row['last_name'],
            siteName=row['site_name'],
            teamName=row['team_name'],
            groupName=row['group_name'],
            experienceName=row['experience_name'],
            contextName=row['context_name'],
        )
        for row in rows
    ]
    logger.info(f"Listed {len(agents)} active agents")
    return agents


async def _fetch_count(conn: Connection, query: str) -> int:
    rows = await fetch_records(conn, query)
    if not rows:
        return 0
    return rows[0]['total'] or 0


async def count_active_agents(conn: Connection) -> AgentCountKpi:
    return AgentCountKpi(totalAgents=await _fetch_count(conn, get_agent_count_query()))


async def count_active_sites(conn: Connection) -> SiteCountKpi:
    return SiteCountKpi(totalSites=await _fetch_count(conn, get_site_count_query()))


async def count_active_teams(conn: Connection) -> TeamCountKpi:
    return TeamCountKpi(totalTeams=await _fetch_count(conn, get_team_count_query()))


async def count_enabled_activities(conn: Connection) -> ActivityCountKpi:
    return ActivityCountKpi(totalActivities=await _fetch_count(conn, get_activity_count_query()))
