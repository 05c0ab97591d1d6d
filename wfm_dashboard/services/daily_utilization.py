"""
Daily utilization aggregation service.

Turns the planned schedule and the concrete activity assignments of the
filtered agents into one ordered daily series of planned hours, assigned
hours and utilization rate.

Pipeline:
1. Fetch: schedule rows and assignment rows are read by two independent
   queries (never joined to each other) and validated into ScheduleEntry /
   AssignmentEntry models. A row that does not fit raises StorageError.
2. Aggregate: seconds are summed per calendar day for each source. Schedules
   count their net duration (lunch deducted), assignments count
   end_at - start_at on the day they start.
3. Merge: the union of days present in either source, ascending, with the
   missing side as 0.
4. Rates: per day assigned / planned x 100, and over the range the weighted
   rate total assigned / total planned x 100. Both are 0 when nothing was
   planned.
5. Format: seconds are converted to hours and rounded half-up to 1 decimal
   once per output field.

The computation is a pure function of the predicate and the rows the store
returns: the same inputs always produce the same result. Errors propagate;
either the whole result is produced or the call fails.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar

from asyncpg import Connection
from pydantic import BaseModel, ValidationError as PydanticValidationError

from wfm_dashboard.core.database import fetch_records
from wfm_dashboard.core.exceptions import StorageError
from wfm_dashboard.models.schemas import (
    AssignmentEntry,
    DailySeriesPoint,
    DailySeriesResult,
    DayBucket,
    FilterPredicate,
    FilterWarning,
    ScheduleEntry,
)
from wfm_dashboard.services.formatting import (
    day_of_week_label,
    seconds_to_hours,
    utilization_rate,
)
from wfm_dashboard.sql.planning_queries import (
    get_assignment_entries_query,
    get_schedule_entries_query,
)

logger = logging.getLogger(__name__)

EntryT = TypeVar('EntryT', bound=BaseModel)


# =============================================================================
# Typed Row Mapping
# =============================================================================


def map_rows(rows: Iterable[Mapping], model: Type[EntryT]) -> List[EntryT]:
    """
    Validate raw rows into typed entries.

    Raises:
        StorageError: If any row does not match the model.
    """
    entries: List[EntryT] = []
    for row in rows:
        try:
            entries.append(model.model_validate(dict(row)))
        except PydanticValidationError as e:
            logger.error(f"Malformed {model.__name__} row: {e}")
            raise StorageError(f"Malformed {model.__name__} row returned by the store") from e
    return entries


async def fetch_schedule_entries(conn: Connection, predicate: FilterPredicate) -> List[ScheduleEntry]:
    query, params = get_schedule_entries_query(predicate)
    rows = await fetch_records(conn, query, *params)
    return map_rows(rows, ScheduleEntry)


async def fetch_assignment_entries(conn: Connection, predicate: FilterPredicate) -> List[AssignmentEntry]:
    query, params = get_assignment_entries_query(predicate)
    rows = await fetch_records(conn, query, *params)
    return map_rows(rows, AssignmentEntry)


# =============================================================================
# Per-Source Aggregation
# =============================================================================


def sum_scheduled_seconds(
    entries: Iterable[ScheduleEntry],
    start_date: date,
    end_date: date,
) -> Dict[date, int]:
    """Net scheduled seconds per day within [start_date, end_date]."""
    totals: Dict[date, int] = defaultdict(int)
    for entry in entries:
        if start_date <= entry.day <= end_date:
            totals[entry.day] += entry.net_seconds
    return dict(totals)


def sum_assigned_seconds(
    entries: Iterable[AssignmentEntry],
    start_date: date,
    end_date: date,
) -> Dict[date, int]:
    """Assigned seconds per start day within [start_date, end_date]."""
    totals: Dict[date, int] = defaultdict(int)
    for entry in entries:
        if start_date <= entry.day <= end_date:
            totals[entry.day] += entry.duration_seconds
    return dict(totals)


async def fetch_scheduled_seconds(conn: Connection, predicate: FilterPredicate) -> Dict[date, int]:
    """
    Scheduled seconds per day for the agents matching the predicate.

    Raises:
        StorageError: If the store fails or returns a malformed row.
    """
    entries = await fetch_schedule_entries(conn, predicate)
    return sum_scheduled_seconds(entries, predicate.start_date, predicate.end_date)


async def fetch_assigned_seconds(conn: Connection, predicate: FilterPredicate) -> Dict[date, int]:
    """
    Assigned seconds per day for the agents matching the predicate.

    Raises:
        StorageError: If the store fails or returns a malformed row.
    """
    entries = await fetch_assignment_entries(conn, predicate)
    return sum_assigned_seconds(entries, predicate.start_date, predicate.end_date)


# =============================================================================
# Merge and Derive
# =============================================================================


def merge_day_series(
    scheduled: Mapping[date, int],
    assigned: Mapping[date, int],
) -> List[DayBucket]:
    """
    Pair the two day mappings into one bucket per day present in either.

    Days are ascending; a side missing for a day counts as 0. Two empty
    mappings give an empty list.
    """
    days = sorted(set(scheduled) | set(assigned))
    return [
        DayBucket(
            day=day,
            scheduled_seconds=scheduled.get(day, 0),
            assigned_seconds=assigned.get(day, 0),
        )
        for day in days
    ]


def build_series_point(bucket: DayBucket) -> DailySeriesPoint:
    return DailySeriesPoint(
        date=bucket.day,
        dayOfWeek=day_of_week_label(bucket.day),
        plannedHours=seconds_to_hours(bucket.scheduled_seconds),
        assignedHours=seconds_to_hours(bucket.assigned_seconds),
        utilizationRate=utilization_rate(bucket.assigned_seconds, bucket.scheduled_seconds),
    )


def build_daily_series(
    buckets: Sequence[DayBucket],
    warnings: Optional[List[FilterWarning]] = None,
) -> DailySeriesResult:
    """
    Derive the output series and range totals from merged buckets.

    The average rate is weighted over the whole range (assigned / scheduled
    seconds x 100), not the mean of the per-day rates. It is taken from the
    unrounded sums, so a one-day range has the same rate as its day.
    """
    total_scheduled = sum(bucket.scheduled_seconds for bucket in buckets)
    total_assigned = sum(bucket.assigned_seconds for bucket in buckets)

    return DailySeriesResult(
        data=[build_series_point(bucket) for bucket in buckets],
        totalPlannedHours=seconds_to_hours(total_scheduled),
        totalAssignedHours=seconds_to_hours(total_assigned),
        averageUtilizationRate=utilization_rate(total_assigned, total_scheduled),
        warnings=list(warnings or []),
    )


# =============================================================================
# Entry Point
# =============================================================================


async def compute_daily_utilization(
    conn: Connection,
    predicate: FilterPredicate,
    warnings: Optional[List[FilterWarning]] = None,
) -> DailySeriesResult:
    """
    Compute the daily planned vs assigned series for a validated predicate.

    Args:
        conn: Request-scoped connection.
        predicate: Output of the filter normalizer (start_date <= end_date).
        warnings: Filter warnings to return alongside the series.

    Returns:
        DailySeriesResult with one point per day present in either source.

    Raises:
        StorageError: If either source cannot be read.
    """
    logger.info(
        f"Computing daily utilization {predicate.start_date.isoformat()}"
        f"..{predicate.end_date.isoformat()}"
    )

    # One connection runs one query at a time, so the sources are read in turn
    scheduled = await fetch_scheduled_seconds(conn, predicate)
    assigned = await fetch_assigned_seconds(conn, predicate)

    buckets = merge_day_series(scheduled, assigned)
    if not buckets:
        logger.warning("No schedule or assignment rows matched the filters")

    result = build_daily_series(buckets, warnings)
    logger.info(
        f"Daily utilization: {len(result.data)} days, "
        f"{result.totalPlannedHours}h planned, {result.totalAssignedHours}h assigned"
    )
    return result
