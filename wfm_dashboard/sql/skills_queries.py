"""
Skill coverage SQL query module.

- get_skill_level_counts_query: agent count per (enabled activity, level),
  input of the skills matrix pivot
- get_agent_skills_query: raw (agent, activity, level) rows
"""

from typing import Any, List, Tuple

from wfm_dashboard.models.schemas import AgentFilter
from wfm_dashboard.sql.filters import build_agent_filter_conditions


QueryWithParams = Tuple[str, List[Any]]


def get_skill_level_counts_query(filters: AgentFilter) -> QueryWithParams:
    """
    Count filtered active agents per enabled activity and skill level.

    An agent without a skill row for an activity is counted at level 0.
    Activities with no matching agent still produce one row with
    agent_count = 0 so they appear in the matrix.

    Returns columns: activity_id, activity_name, level, agent_count.
    """
    params: List[Any] = []
    where_conditions = ["u.role = 1"]
    where_conditions.extend(build_agent_filter_conditions(filters, params))
    where_clause = " AND ".join(where_conditions)

    query = f"""
WITH filtered_agents AS (
    SELECT u.id AS agent_id
    FROM app_user u
    LEFT JOIN agent_user au ON au.id = u.id
    WHERE {where_clause}
)
SELECT
    a.id AS activity_id,
    a.name AS activity_name,
    COALESCE(s.level, 0) AS level,
    COUNT(fa.agent_id) AS agent_count
FROM activity a
LEFT JOIN filtered_agents fa ON TRUE
LEFT JOIN skill s ON s.activity_id = a.id AND s.agent_id = fa.agent_id
WHERE a.enabled
GROUP BY a.id, a.name, COALESCE(s.level, 0)
ORDER BY a.name, level
"""
    return query, params


def get_agent_skills_query(filters: AgentFilter) -> QueryWithParams:
    """
    Skill rows of filtered active agents.

    Returns columns: last_name, first_name, activity_name, level.
    """
    params: List[Any] = []
    where_conditions = ["u.role = 1"]
    where_conditions.extend(build_agent_filter_conditions(filters, params))
    where_clause = " AND ".join(where_conditions)

    query = f"""
SELECT
    u.last_name,
    u.first_name,
    a.name AS activity_name,
    COALESCE(s.level, 0) AS level
FROM skill s
JOIN app_user u ON u.id = s.agent_id
JOIN agent_user au ON au.id = s.agent_id
JOIN activity a ON a.id = s.activity_id
WHERE {where_clause}
ORDER BY u.last_name, u.first_name, a.name
"""
    return query, params
