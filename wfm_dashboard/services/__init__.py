"""
Dashboard services module.

Business logic behind the API routers. Services are stateless: each receives
a request-scoped asyncpg connection and validated filters, and returns
pydantic response models.

Services:
- filters: raw query parameters -> FilterPredicate / AgentFilter
- formatting: half-up rounding, hours, rates, day and clock labels
- daily_utilization: daily planned vs assigned series
- planning: planning reports and KPIs
- reference: lookup lists, agent listing, headcount KPIs
- skills: skills matrix (pandas pivot) and agent skill rows
- staffing: sizing slots vs assigned headcount
"""

from wfm_dashboard.services.filters import (
    RawReportFilters,
    parse_report_date,
    resolve_contract_code,
    normalize_agent_filters,
    normalize_filters,
)

from wfm_dashboard.services.formatting import (
    round_half_up,
    seconds_to_hours,
    utilization_rate,
    day_of_week_label,
    format_clock,
)

from wfm_dashboard.services.daily_utilization import (
    map_rows,
    fetch_schedule_entries,
    fetch_assignment_entries,
    sum_scheduled_seconds,
    sum_assigned_seconds,
    fetch_scheduled_seconds,
    fetch_assigned_seconds,
    merge_day_series,
    build_daily_series,
    compute_daily_utilization,
)

from wfm_dashboard.services.planning import (
    get_schedule_summary,
    get_activity_repartition,
    get_schedule_repartition,
    get_agent_occupancy,
    get_agent_assignment_ratios,
    get_max_agents,
)

from wfm_dashboard.services.reference import (
    list_reference_items,
    list_enabled_activities,
    list_active_agents,
    count_active_agents,
    count_active_sites,
    count_active_teams,
    count_enabled_activities,
)

from wfm_dashboard.services.skills import (
    build_skills_matrix,
    get_skills_matrix,
    list_agent_skills,
)

from wfm_dashboard.services.staffing import get_activity_staffing

__all__ = [
    # Filters
    'RawReportFilters',
    'parse_report_date',
    'resolve_contract_code',
    'normalize_agent_filters',
    'normalize_filters',
    # Formatting
    'round_half_up',
    'seconds_to_hours',
    'utilization_rate',
    'day_of_week_label',
    'format_clock',
    # Daily utilization
    'map_rows',
    'fetch_schedule_entries',
    'fetch_assignment_entries',
    'sum_scheduled_seconds',
    'sum_assigned_seconds',
    'fetch_scheduled_seconds',
    'fetch_assigned_seconds',
    'merge_day_series',
    'build_daily_series',
    'compute_daily_utilization',
    # Planning
    'get_schedule_summary',
    'get_activity_repartition',
    'get_schedule_repartition',
    'get_agent_occupancy',
    'get_agent_assignment_ratios',
    'get_max_agents',
    # Reference
    'list_reference_items',
    'list_enabled_activities',
    'list_active_agents',
    'count_active_agents',
    'count_active_sites',
    'count_active_teams',
    'count_enabled_activities',
    # Skills
    'build_skills_matrix',
    'get_skills_matrix',
    'list_agent_skills',
    # Staffing
    'get_activity_staffing',
]
