"""
Planning report services.

Reports built on the same typed schedule/assignment entries as the daily
utilization series, so every report counts planned time net of lunch and
assigned time on the day it starts:

- get_schedule_summary: headcount of the filtered agents
- get_activity_repartition: assigned time per (activity, day)
- get_schedule_repartition: working window per (agent, day)
- get_agent_occupancy: planned vs assigned hours per agent
- get_agent_assignment_ratios: share of each agent's planned time spent on
  each activity
- get_max_agents: larger of the scheduled and assigned headcounts

The activity constraint of a predicate narrows assignments only; planned time
always covers the agent's whole schedule.
"""

import logging
from collections import defaultdict
from dataclasses import replace
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from asyncpg import Connection

from wfm_dashboard.core.database import fetch_records
from wfm_dashboard.models.schemas import (
    ActivityRepartitionRow,
    AgentAssignmentRatioRow,
    AgentCountKpi,
    AgentFilter,
    AgentOccupancyRow,
    FilterPredicate,
    ScheduleRepartitionRow,
    ScheduleSummary,
)
from wfm_dashboard.services.daily_utilization import (
    fetch_assignment_entries,
    fetch_schedule_entries,
)
from wfm_dashboard.services.formatting import (
    format_clock,
    round_half_up,
    seconds_to_hours,
    utilization_rate,
)
from wfm_dashboard.sql.planning_queries import (
    get_activity_names_query,
    get_agent_names_query,
    get_max_agents_query,
    get_schedule_summary_query,
)

logger = logging.getLogger(__name__)

AgentName = Tuple[Optional[str], Optional[str]]


# =============================================================================
# Name Lookups
# =============================================================================


async def fetch_agent_names(conn: Connection, agent_ids: Sequence[int]) -> Dict[int, AgentName]:
    """(first_name, last_name) per agent id; empty input issues no query."""
    if not agent_ids:
        return {}
    query, params = get_agent_names_query(sorted(set(agent_ids)))
    rows = await fetch_records(conn, query, *params)
    return {row['id']: (row['first_name'], row['last_name']) for row in rows}


async def fetch_activity_names(conn: Connection, activity_ids: Sequence[int]) -> Dict[int, str]:
    if not activity_ids:
        return {}
    query, params = get_activity_names_query(sorted(set(activity_ids)))
    rows = await fetch_records(conn, query, *params)
    return {row['id']: row['name'] for row in rows}


def _without_activity(predicate: FilterPredicate) -> FilterPredicate:
    return replace(predicate, activity_id=None)


# =============================================================================
# Reports
# =============================================================================


async def get_schedule_summary(conn: Connection, filters: AgentFilter) -> ScheduleSummary:
    query, params = get_schedule_summary_query(filters)
    rows = await fetch_records(conn, query, *params)
    if not rows:
        return ScheduleSummary(totalAgents=0, totalSites=0, totalTeams=0, activeActivities=0)

    row = rows[0]
    return ScheduleSummary(
        totalAgents=row['total_agents'] or 0,
        totalSites=row['total_sites'] or 0,
        totalTeams=row['total_teams'] or 0,
        activeActivities=row['active_activities'] or 0,
    )


async def get_activity_repartition(
    conn: Connection,
    predicate: FilterPredicate,
) -> List[ActivityRepartitionRow]:
    """
    Assigned seconds per (activity, day), ordered by day then activity name.
    """
    entries = await fetch_assignment_entries(conn, predicate)

    durations: Dict[Tuple[int, date], int] = defaultdict(int)
    for entry in entries:
        durations[(entry.activity_id, entry.day)] += entry.duration_seconds

    names = await fetch_activity_names(conn, [activity_id for activity_id, _ in durations])

    result = [
        ActivityRepartitionRow(
            id=activity_id,
            name=names.get(activity_id, str(activity_id)),
            date=day,
            durationSeconds=seconds,
            durationHours=seconds_to_hours(seconds),
        )
        for (activity_id, day), seconds in durations.items()
    ]
    result.sort(key=lambda row: (row.date, row.name, row.id))

    logger.info(f"Activity repartition: {len(result)} rows")
    return result


async def get_schedule_repartition(
    conn: Connection,
    predicate: FilterPredicate,
) -> List[ScheduleRepartitionRow]:
    """
    Earliest start and latest end per (agent, day), with an 'HH:MM - HH:MM'
    label, ordered by agent then day.
    """
    entries = await fetch_schedule_entries(conn, _without_activity(predicate))

    windows: Dict[Tuple[int, date], Tuple[int, int]] = {}
    for entry in entries:
        key = (entry.agent_id, entry.day)
        if key in windows:
            start, end = windows[key]
            windows[key] = (min(start, entry.start_seconds), max(end, entry.end_seconds))
        else:
            windows[key] = (entry.start_seconds, entry.end_seconds)

    names = await fetch_agent_names(conn, [agent_id for agent_id, _ in windows])

    result = []
    for (agent_id, day), (start, end) in sorted(windows.items()):
        first_name, last_name = names.get(agent_id, (None, None))
        result.append(
            ScheduleRepartitionRow(
                id=agent_id,
                firstName=first_name,
                lastName=last_name,
                date=day,
                startSeconds=start,
                endSeconds=end,
                schedule=f"{format_clock(start)} - {format_clock(end)}",
            )
        )

    logger.info(f"Schedule repartition: {len(result)} rows")
    return result


async def get_agent_occupancy(
    conn: Connection,
    predicate: FilterPredicate,
) -> List[AgentOccupancyRow]:
    """
    Planned vs assigned hours per agent over the range.

    Every agent with a schedule or an assignment appears; the missing side is
    0 and the occupancy rate follows the daily utilization zero policy.
    """
    schedules = await fetch_schedule_entries(conn, _without_activity(predicate))
    assignments = await fetch_assignment_entries(conn, predicate)

    planned: Dict[int, int] = defaultdict(int)
    for entry in schedules:
        planned[entry.agent_id] += entry.net_seconds

    assigned: Dict[int, int] = defaultdict(int)
    for entry in assignments:
        assigned[entry.agent_id] += entry.duration_seconds

    agent_ids = sorted(set(planned) | set(assigned))
    names = await fetch_agent_names(conn, agent_ids)

    result = []
    for agent_id in agent_ids:
        first_name, last_name = names.get(agent_id, (None, None))
        result.append(
            AgentOccupancyRow(
                agentId=agent_id,
                lastName=last_name,
                firstName=first_name,
                planned=seconds_to_hours(planned.get(agent_id, 0)),
                assigned=seconds_to_hours(assigned.get(agent_id, 0)),
                occupancyRate=utilization_rate(assigned.get(agent_id, 0), planned.get(agent_id, 0)),
            )
        )

    logger.info(f"Agent occupancy: {len(result)} agents")
    return result


async def get_agent_assignment_ratios(
    conn: Connection,
    predicate: FilterPredicate,
) -> List[AgentAssignmentRatioRow]:
    """
    Assigned hours per (agent, activity) against the agent's planned hours.

    Planned hours use the same agent filters and range as the assignments.
    The ratio has 3 decimals and is None when the agent has no planned time.
    """
    assignments = await fetch_assignment_entries(conn, predicate)
    schedules = await fetch_schedule_entries(conn, _without_activity(predicate))

    planned: Dict[int, int] = defaultdict(int)
    for entry in schedules:
        planned[entry.agent_id] += entry.net_seconds

    assigned: Dict[Tuple[int, int], int] = defaultdict(int)
    for entry in assignments:
        assigned[(entry.agent_id, entry.activity_id)] += entry.duration_seconds

    names = await fetch_agent_names(conn, [agent_id for agent_id, _ in assigned])
    activities = await fetch_activity_names(conn, [activity_id for _, activity_id in assigned])

    result = []
    for (agent_id, activity_id), seconds in assigned.items():
        first_name, last_name = names.get(agent_id, (None, None))
        planned_seconds = planned.get(agent_id, 0)
        ratio = round_half_up(seconds / planned_seconds, 3) if planned_seconds > 0 else None
        result.append(
            AgentAssignmentRatioRow(
                agentId=agent_id,
                name=activities.get(activity_id, str(activity_id)),
                lastName=last_name,
                firstName=first_name,
                assigned=seconds_to_hours(seconds),
                planned=seconds_to_hours(planned_seconds),
                ratio=ratio,
            )
        )
    result.sort(key=lambda row: (row.agentId, row.name))

    logger.info(f"Agent assignment ratios: {len(result)} rows")
    return result


async def get_max_agents(conn: Connection, predicate: FilterPredicate) -> AgentCountKpi:
    query, params = get_max_agents_query(_without_activity(predicate))
    rows = await fetch_records(conn, query, *params)
    total = rows[0]['total_agents'] if rows else 0
    return AgentCountKpi(totalAgents=total or 0)
