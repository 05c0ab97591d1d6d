"""
Activity staffing service.

Each published sizing slot is compared with the number of agents assigned to
the same activity at the slot's begin time: delta = assigned - target.
"""

import logging
from datetime import date
from typing import List, Optional

from asyncpg import Connection

from wfm_dashboard.core.database import fetch_records
from wfm_dashboard.models.schemas import ActivityStaffingSlot
from wfm_dashboard.services.formatting import day_of_week_label
from wfm_dashboard.sql.staffing_queries import get_activity_staffing_query

logger = logging.getLogger(__name__)


# Bounds stored when a slot has no minimum / maximum size
INT32_MIN = -2147483648
INT32_MAX = 2147483647


def _bound(value: Optional[int], sentinel: int) -> Optional[int]:
    if value is None or value == sentinel:
        return None
    return value


async def get_activity_staffing(
    conn: Connection,
    start_date: date,
    end_date: date,
) -> List[ActivityStaffingSlot]:
    """
    Sizing slots beginning within [start_date, end_date] with their assigned
    headcount, ordered by time of day.
    """
    query, params = get_activity_staffing_query(start_date, end_date)
    rows = await fetch_records(conn, query, *params)

    slots = []
    for row in rows:
        begin_at = row['begin_at']
        count = row['assigned_count'] or 0
        slots.append(
            ActivityStaffingSlot(
                id=row['id'],
                name=row['activity_name'],
                date=begin_at.date(),
                dayOfWeek=day_of_week_label(begin_at.date()),
                time=begin_at.strftime('%H:%M:%S'),
                target=row['size'],
                min=_bound(row['min_size'], INT32_MIN),
                max=_bound(row['max_size'], INT32_MAX),
                count=count,
                delta=count - row['size'],
            )
        )

    logger.info(f"Activity staffing: {len(slots)} slots")
    return slots
