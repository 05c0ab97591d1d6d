"""
Activity staffing SQL query module.

Compares each published sizing slot (activity_publication_sizing) with the
number of assignments that start exactly at the slot's begin time for the
same activity.
"""

from datetime import date
from typing import Any, List, Tuple

from wfm_dashboard.sql.filters import bind


QueryWithParams = Tuple[str, List[Any]]


def get_activity_staffing_query(start_date: date, end_date: date) -> QueryWithParams:
    """
    Generate the sizing vs assigned count query for slots beginning within
    [start_date, end_date].

    Slots without any assignment are returned with assigned_count = 0.
    min_size/max_size are returned raw; the int32 bounds used as "unbounded"
    sentinels are mapped by the staffing service.

    Returns columns: id, activity_name, begin_at, size, min_size, max_size,
    assigned_count.
    """
    params: List[Any] = []
    date_condition = (
        f"aps.begin_at::date BETWEEN {bind(params, start_date)} AND {bind(params, end_date)}"
    )

    query = f"""
SELECT
    aps.id,
    a.name AS activity_name,
    aps.begin_at,
    aps.size,
    aps.min_size,
    aps.max_size,
    COALESCE(assigned.assigned_count, 0) AS assigned_count
FROM activity_publication_sizing aps
JOIN activity a ON a.id = aps.activity_id
LEFT JOIN (
    SELECT aap.activity_id, aap.start_at, COUNT(*) AS assigned_count
    FROM agent_assignment_publication aap
    GROUP BY aap.activity_id, aap.start_at
) assigned ON assigned.activity_id = aps.activity_id AND assigned.start_at = aps.begin_at
WHERE {date_condition}
ORDER BY aps.begin_at::time, a.name, aps.id
"""
    return query, params
