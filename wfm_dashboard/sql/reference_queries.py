"""
Reference data and headcount SQL query module.

Provides the lookup lists used by the filter panel (sites, teams, groups,
experiences, contexts, enabled activities), the active agent listing and the
headcount KPIs shown on the home page.

Table names come from the ReferenceTable enum, never from caller input.
"""

from typing import Any, List, Tuple

from wfm_dashboard.models.enums import ReferenceTable
from wfm_dashboard.models.schemas import AgentFilter
from wfm_dashboard.sql.filters import active_contract_condition, build_agent_filter_conditions


QueryWithParams = Tuple[str, List[Any]]


# Sub-select of agents holding an active contract today
_ACTIVE_AGENT_IDS = f"""
    SELECT ac.agent_id
    FROM agent_contract ac
    WHERE {active_contract_condition("ac")}
"""


def get_reference_items_query(table: ReferenceTable) -> str:
    """{id, name} rows of a lookup table ordered by name."""
    return f"SELECT id, name FROM {table.value} ORDER BY name"


def get_enabled_activities_query() -> str:
    return "SELECT id, name FROM activity WHERE enabled ORDER BY name"


def get_active_agents_query(filters: AgentFilter) -> QueryWithParams:
    """
    Generate the active agent listing.

    One row per active contract, with its nature code, contract name,
    departure date and the agent's organisation labels.

    Returns columns: id, contract_nature, contract, departure_date, email,
    first_name, last_name, site_name, team_name, group_name,
    experience_name, context_name.
    """
    params: List[Any] = []
    where_conditions = build_agent_filter_conditions(filters, params, contract_alias="ac")
    where_clause = " AND ".join(where_conditions)

    query = f"""
SELECT
    ac.agent_id AS id,
    ac.contract_nature,
    ci.name AS contract,
    ac.departure_date,
    u.email,
    u.first_name,
    u.last_name,
    s.name AS site_name,
    t.name AS team_name,
    g.name AS group_name,
    e.name AS experience_name,
    c.name AS context_name
FROM agent_contract ac
LEFT JOIN app_user u ON u.id = ac.agent_id
LEFT JOIN site s ON s.id = u.site_id
LEFT JOIN agent_user au ON au.id = u.id
LEFT JOIN team t ON t.id = au.team_id
LEFT JOIN agent_group g ON g.id = au.group_id
LEFT JOIN contract_info ci ON ci.id = ac.contract_id
LEFT JOIN experience e ON e.id = au.experience_id
LEFT JOIN context c ON c.id = au.context_id
WHERE {where_clause}
ORDER BY u.last_name, u.first_name, ac.agent_id
"""
    return query, params


def get_agent_count_query() -> str:
    return f"""
SELECT COUNT(DISTINCT u.id) AS total
FROM app_user u
WHERE u.role = 1
  AND u.id IN ({_ACTIVE_AGENT_IDS})
"""


def get_site_count_query() -> str:
    return f"""
SELECT COUNT(DISTINCT u.site_id) AS total
FROM app_user u
WHERE u.role = 1
  AND u.site_id IS NOT NULL
  AND u.id IN ({_ACTIVE_AGENT_IDS})
"""


def get_team_count_query() -> str:
    return f"""
SELECT COUNT(DISTINCT au.team_id) AS total
FROM agent_user au
JOIN app_user u ON u.id = au.id
WHERE u.role = 1
  AND au.team_id IS NOT NULL
  AND u.id IN ({_ACTIVE_AGENT_IDS})
"""


def get_activity_count_query() -> str:
    return "SELECT COUNT(*) AS total FROM activity WHERE enabled"
