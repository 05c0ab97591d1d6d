"""
Planning SQL query module.

Parameterized PostgreSQL queries over the two planning sources:
- agent_schedule_publication: planned working interval per agent and date
  (offsets in seconds since midnight, optional lunch bounds)
- agent_assignment_publication: concrete activity assignment per agent
  (start/end timestamps, counted on DATE(start_at))

The two sources are always read by separate queries and never joined to each
other; each is joined only to app_user/agent_user to apply the agent filters.
Aggregation of the returned rows happens in the planning services, after the
rows have been validated into ScheduleEntry / AssignmentEntry models.

Every builder returns (query, params) ready for fetch_records(conn, query, *params).
"""

from typing import Any, List, Sequence, Tuple

from wfm_dashboard.models.schemas import AgentFilter, FilterPredicate
from wfm_dashboard.sql.filters import bind, build_agent_filter_conditions


QueryWithParams = Tuple[str, List[Any]]


def get_schedule_entries_query(predicate: FilterPredicate) -> QueryWithParams:
    """
    Generate the query for schedule rows of filtered agents within the range.

    Returns columns: agent_id, day, start_seconds, end_seconds,
    lunch_start_seconds, lunch_end_seconds. The activity constraint of the
    predicate does not apply to schedules.
    """
    params: List[Any] = []
    where_conditions = [
        f"asp.date BETWEEN {bind(params, predicate.start_date)} AND {bind(params, predicate.end_date)}",
    ]
    where_conditions.extend(build_agent_filter_conditions(predicate, params))

    where_clause = " AND ".join(where_conditions)

    query = f"""
SELECT
    asp.agent_id,
    asp.date AS day,
    asp.start_seconds,
    asp.end_seconds,
    asp.lunch_start_seconds,
    asp.lunch_end_seconds
FROM agent_schedule_publication asp
JOIN app_user u ON u.id = asp.agent_id
JOIN agent_user au ON au.id = asp.agent_id
WHERE {where_clause}
ORDER BY asp.date, asp.agent_id
"""
    return query, params


def get_assignment_entries_query(predicate: FilterPredicate) -> QueryWithParams:
    """
    Generate the query for assignment rows of filtered agents whose start
    falls within the range.

    Returns columns: agent_id, activity_id, start_at, end_at. When the
    predicate carries an activity_id, only that activity is returned.
    """
    params: List[Any] = []
    where_conditions = [
        f"aap.start_at::date BETWEEN {bind(params, predicate.start_date)} AND {bind(params, predicate.end_date)}",
    ]
    where_conditions.extend(build_agent_filter_conditions(predicate, params))

    if predicate.activity_id is not None:
        where_conditions.append(f"aap.activity_id = {bind(params, predicate.activity_id)}")

    where_clause = " AND ".join(where_conditions)

    query = f"""
SELECT
    aap.agent_id,
    aap.activity_id,
    aap.start_at,
    aap.end_at
FROM agent_assignment_publication aap
JOIN app_user u ON u.id = aap.agent_id
JOIN agent_user au ON au.id = aap.agent_id
WHERE {where_clause}
ORDER BY aap.start_at, aap.agent_id
"""
    return query, params


def get_agent_names_query(agent_ids: Sequence[int]) -> QueryWithParams:
    """Names of the given agents. Returns columns: id, first_name, last_name."""
    query = """
SELECT u.id, u.first_name, u.last_name
FROM app_user u
WHERE u.id = ANY($1::int[])
"""
    return query, [list(agent_ids)]


def get_activity_names_query(activity_ids: Sequence[int]) -> QueryWithParams:
    """
    Names of the given activities, enabled or not, since assignments may
    reference an activity that has since been disabled.
    """
    query = """
SELECT a.id, a.name
FROM activity a
WHERE a.id = ANY($1::int[])
"""
    return query, [list(activity_ids)]


def get_schedule_summary_query(filters: AgentFilter) -> QueryWithParams:
    """
    Headcount of the filtered active agents and their sites and teams, plus
    the number of enabled activities.

    Returns a single row: total_agents, total_sites, total_teams,
    active_activities.
    """
    params: List[Any] = []
    where_conditions = ["u.role = 1"]
    where_conditions.extend(build_agent_filter_conditions(filters, params))

    where_clause = " AND ".join(where_conditions)

    query = f"""
SELECT
    COUNT(DISTINCT u.id) AS total_agents,
    COUNT(DISTINCT u.site_id) AS total_sites,
    COUNT(DISTINCT au.team_id) AS total_teams,
    (SELECT COUNT(*) FROM activity a WHERE a.enabled) AS active_activities
FROM app_user u
LEFT JOIN agent_user au ON au.id = u.id
WHERE {where_clause}
"""
    return query, params


def get_max_agents_query(predicate: FilterPredicate) -> QueryWithParams:
    """
    Larger of the two distinct agent counts over the range: agents with at
    least one assignment and agents with at least one schedule.

    Returns a single row: total_agents.
    """
    params: List[Any] = []

    assignment_conditions = [
        f"aap.start_at::date BETWEEN {bind(params, predicate.start_date)} AND {bind(params, predicate.end_date)}",
    ]
    assignment_conditions.extend(build_agent_filter_conditions(predicate, params))

    schedule_conditions = [
        f"asp.date BETWEEN {bind(params, predicate.start_date)} AND {bind(params, predicate.end_date)}",
    ]
    schedule_conditions.extend(build_agent_filter_conditions(predicate, params))

    query = f"""
WITH assigned_agents AS (
    SELECT COUNT(DISTINCT aap.agent_id) AS agent_count
    FROM agent_assignment_publication aap
    JOIN app_user u ON u.id = aap.agent_id
    JOIN agent_user au ON au.id = aap.agent_id
    WHERE {" AND ".join(assignment_conditions)}
),
scheduled_agents AS (
    SELECT COUNT(DISTINCT asp.agent_id) AS agent_count
    FROM agent_schedule_publication asp
    JOIN app_user u ON u.id = asp.agent_id
    JOIN agent_user au ON au.id = asp.agent_id
    WHERE {" AND ".join(schedule_conditions)}
)
SELECT GREATEST(
    (SELECT agent_count FROM assigned_agents),
    (SELECT agent_count FROM scheduled_agents)
) AS total_agents
"""
    return query, params
