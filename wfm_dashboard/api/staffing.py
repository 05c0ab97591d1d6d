"""
FastAPI router module for activity staffing.

Key Endpoints:
- GET /staffing/activity: sizing slots vs assigned headcount over a date
  range; defaults to the configured staffing day for both bounds
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from wfm_dashboard.api.params import raise_http_error
from wfm_dashboard.core.dependencies import DBSessionDep, SettingsDep
from wfm_dashboard.models.schemas import ActivityStaffingSlot
from wfm_dashboard.services.filters import RawReportFilters, normalize_filters
from wfm_dashboard.services.staffing import get_activity_staffing

router = APIRouter()


@router.get("/activity", response_model=List[ActivityStaffingSlot])
async def activity_staffing(
    db: DBSessionDep,
    settings: SettingsDep,
    startDate: Optional[str] = Query(default=None, description="First day, YYYY-MM-DD"),
    endDate: Optional[str] = Query(default=None, description="Last day (inclusive), YYYY-MM-DD"),
) -> List[ActivityStaffingSlot]:
    try:
        predicate, _ = normalize_filters(
            RawReportFilters(start_date=startDate, end_date=endDate),
            settings.staffing_range_defaults(),
        )
        return await get_activity_staffing(db, predicate.start_date, predicate.end_date)
    except Exception as e:
        raise_http_error(e, "Failed to fetch activity staffing")
