"""
Skill coverage service.

The skills matrix counts, for every enabled activity, how many filtered
active agents sit at each level of the fixed table (Aucun, En cours, Acquis,
Expert). An agent without a skill row counts as Aucun; levels above 3 fold
into Expert. The (activity, level) counts come from the database and are
pivoted into one row per activity with pandas.
"""

import logging
from typing import List

import numpy as np
import pandas as pd
from asyncpg import Connection

from wfm_dashboard.core.database import fetch_records
from wfm_dashboard.models.enums import SKILL_LEVEL_LABELS, SkillLevel
from wfm_dashboard.models.schemas import (
    AgentFilter,
    AgentSkill,
    ReferenceItem,
    SkillsMatrix,
    SkillsMatrixRow,
)
from wfm_dashboard.sql.skills_queries import get_agent_skills_query, get_skill_level_counts_query

logger = logging.getLogger(__name__)


def build_skills_matrix(counts: pd.DataFrame) -> SkillsMatrix:
    """
    Pivot (activity_id, activity_name, level, agent_count) rows into the matrix.

    Activities keep the order of their first appearance in `counts`.

    Args:
        counts: One row per (activity, raw level) with the agent count.

    Returns:
        SkillsMatrix with every level label present for every activity.
    """
    if counts.empty:
        return SkillsMatrix(activities=[], levels=list(SKILL_LEVEL_LABELS), data=[])

    counts = counts.copy()
    counts['level_label'] = counts['level'].map(lambda level: SkillLevel.from_level(level).value)

    pivot = counts.pivot_table(
        index=['activity_id', 'activity_name'],
        columns='level_label',
        values='agent_count',
        aggfunc='sum',
        fill_value=0,
        sort=False,
    )
    pivot = pivot.reindex(columns=SKILL_LEVEL_LABELS, fill_value=0).astype(np.int64)

    activities = []
    data = []
    for (activity_id, activity_name), levels in pivot.iterrows():
        activities.append(ReferenceItem(id=int(activity_id), name=activity_name))
        data.append(
            SkillsMatrixRow(
                activityId=int(activity_id),
                activityName=activity_name,
                levels={label: int(levels[label]) for label in SKILL_LEVEL_LABELS},
            )
        )

    return SkillsMatrix(activities=activities, levels=list(SKILL_LEVEL_LABELS), data=data)


async def get_skills_matrix(conn: Connection, filters: AgentFilter) -> SkillsMatrix:
    query, params = get_skill_level_counts_query(filters)
    rows = await fetch_records(conn, query, *params)

    counts = pd.DataFrame(
        [dict(row) for row in rows],
        columns=['activity_id', 'activity_name', 'level', 'agent_count'],
    )
    matrix = build_skills_matrix(counts)

    logger.info(f"Skills matrix: {len(matrix.data)} activities")
    return matrix


async def list_agent_skills(conn: Connection, filters: AgentFilter) -> List[AgentSkill]:
    query, params = get_agent_skills_query(filters)
    rows = await fetch_records(conn, query, *params)
    return [
        AgentSkill(
            lastName=row['last_name'],
            firstName=row['first_name'],
            activityName=row['activity_name'],
            level=max(0, row['level']),
            levelLabel=SkillLevel.from_level(row['level']),
        )
        for row in rows
    ]
