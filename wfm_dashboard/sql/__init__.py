"""
SQL query module for the workforce dashboard backend.

Provides parameterized PostgreSQL queries (asyncpg $n placeholders) for:
- The shared agent filter clause (filters)
- Planning sources and planning KPIs (planning_queries)
- Lookup lists, agent listing and headcount KPIs (reference_queries)
- Skill coverage (skills_queries)
- Activity staffing (staffing_queries)

Builders that take filters return (query, params); fixed queries return the
query string only.

Example usage:
    from wfm_dashboard.sql import get_schedule_entries_query

    query, params = get_schedule_entries_query(predicate)
    rows = await fetch_records(conn, query, *params)
"""

from wfm_dashboard.sql.filters import (
    bind,
    active_contract_condition,
    build_agent_filter_conditions,
)

from wfm_dashboard.sql.planning_queries import (
    get_schedule_entries_query,
    get_assignment_entries_query,
    get_agent_names_query,
    get_activity_names_query,
    get_schedule_summary_query,
    get_max_agents_query,
)

from wfm_dashboard.sql.reference_queries import (
    get_reference_items_query,
    get_enabled_activities_query,
    get_active_agents_query,
    get_agent_count_query,
    get_site_count_query,
    get_team_count_query,
    get_activity_count_query,
)

from wfm_dashboard.sql.skills_queries import (
    get_skill_level_counts_query,
    get_agent_skills_query,
)

from wfm_dashboard.sql.staffing_queries import get_activity_staffing_query

__all__ = [
    # Filters
    'bind',
    'active_contract_condition',
    'build_agent_filter_conditions',
    # Planning
    'get_schedule_entries_query',
    'get_assignment_entries_query',
    'get_agent_names_query',
    'get_activity_names_query',
    'get_schedule_summary_query',
    'get_max_agents_query',
    # Reference
    'get_reference_items_query',
    'get_enabled_activities_query',
    'get_active_agents_query',
    'get_agent_count_query',
    'get_site_count_query',
    'get_team_count_query',
    'get_activity_count_query',
    # Skills
    'get_skill_level_counts_query',
    'get_agent_skills_query',
    # Staffing
    'get_activity_staffing_query',
]
