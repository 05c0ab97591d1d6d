"""
Pydantic request/response models for the workforce dashboard backend.

This module provides type-safe data validation and serialization for:
- Internal value objects (filter predicate, date-range defaults, day buckets)
- Row shapes read from the store (schedule and assignment entries), validated
  before any aggregation runs
- Response contracts for every report endpoint

Response models use camelCase field names because the dashboard frontend
consumes them verbatim.

All models use Pydantic v2 syntax.
"""

from dataclasses import dataclass
from datetime import datetime, date as DateType
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ConfigDict, model_validator

from wfm_dashboard.models.enums import (
    FilterWarningCode,
    HealthStatus,
    SkillLevel,
)


# =============================================================================
# Internal Value Objects
# =============================================================================


@dataclass(frozen=True)
class DateRangeDefaults:
    """Dates substituted when a caller leaves one or both bounds out."""
    start_date: DateType
    end_date: DateType


@dataclass(frozen=True)
class AgentFilter:
    """Categorical agent constraints for reports that take no date range."""
    site_id: Optional[int] = None
    contract_code: Optional[int] = None
    team_id: Optional[int] = None
    group_id: Optional[int] = None
    experience_id: Optional[int] = None
    context_id: Optional[int] = None


@dataclass(frozen=True)
class FilterPredicate:
    """
    Normalized, AND-composed report filter.

    The inclusive date range is mandatory and ordered (start_date <= end_date).
    Every other attribute is an optional equality constraint; None matches any.

    Attributes:
        start_date: First day of the range (inclusive).
        end_date: Last day of the range (inclusive).
        site_id: app_user.site_id constraint.
        contract_code: agent_contract.contract_nature constraint (numeric code).
        team_id: agent_user.team_id constraint.
        group_id: agent_user.group_id constraint.
        experience_id: agent_user.experience_id constraint.
        context_id: agent_user.context_id constraint.
        activity_id: Activity constraint, only honoured by reports that
            break assignments down by activity.
    """
    start_date: DateType
    end_date: DateType
    site_id: Optional[int] = None
    contract_code: Optional[int] = None
    team_id: Optional[int] = None
    group_id: Optional[int] = None
    experience_id: Optional[int] = None
    context_id: Optional[int] = None
    activity_id: Optional[int] = None


@dataclass(frozen=True)
class DayBucket:
    """Scheduled and assigned seconds accumulated for one calendar day."""
    day: DateType
    scheduled_seconds: int
    assigned_seconds: int


# =============================================================================
# Source Rows
# =============================================================================


class ScheduleEntry(BaseModel):
    """
    Planned working interval of one agent on one date.

    Offsets are seconds since midnight. The lunch break is deducted only when
    both of its bounds are present.
    """
    model_config = ConfigDict(frozen=True)

    agent_id: int
    day: DateType
    start_seconds: int = Field(..., ge=0)
    end_seconds: int = Field(..., ge=0)
    lunch_start_seconds: Optional[int] = Field(default=None, ge=0)
    lunch_end_seconds: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode='after')
    def _check_interval(self) -> 'ScheduleEntry':
        if self.end_seconds < self.start_seconds:
            raise ValueError(
                f"schedule end ({self.end_seconds}) precedes start ({self.start_seconds})"
            )
        return self

    @property
    def lunch_seconds(self) -> int:
        if self.lunch_start_seconds is None or self.lunch_end_seconds is None:
            return 0
        return max(0, self.lunch_end_seconds - self.lunch_start_seconds)

    @property
    def net_seconds(self) -> int:
        return max(0, self.end_seconds - self.start_seconds - self.lunch_seconds)


class AssignmentEntry(BaseModel):
    """Concrete activity assignment of one agent; counted on the day it starts."""
    model_config = ConfigDict(frozen=True)

    agent_id: int
    activity_id: int
    start_at: datetime
    end_at: datetime

    @model_validator(mode='after')
    def _check_interval(self) -> 'AssignmentEntry':
        if self.end_at < self.start_at:
            raise ValueError(
                f"assignment end ({self.end_at.isoformat()}) precedes start ({self.start_at.isoformat()})"
            )
        return self

    @property
    def day(self) -> DateType:
        return self.start_at.date()

    @property
    def duration_seconds(self) -> int:
        return int((self.end_at - self.start_at).total_seconds())


# =============================================================================
# Daily Utilization
# =============================================================================


class FilterWarning(BaseModel):
    """A filter value that was not understood and therefore not applied."""
    code: FilterWarningCode = Field(
        default=FilterWarningCode.UNRECOGNIZED_FILTER_VALUE,
        description="Machine-readable warning code"
    )
    field: str = Field(..., description="Query parameter carrying the value")
    value: str = Field(..., description="Value as received")
    message: str = Field(..., description="Human-readable explanation")


class DailySeriesPoint(BaseModel):
    """One calendar day of planned vs assigned hours."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date": "2025-07-07",
                "dayOfWeek": "Lundi",
                "plannedHours": 8.0,
                "assignedHours": 4.0,
                "utilizationRate": 50.0,
            }
        }
    )

    date: DateType = Field(..., description="Calendar day")
    dayOfWeek: str = Field(..., description="Localized day-of-week label")
    plannedHours: float = Field(..., ge=0, description="Scheduled hours net of lunch, 1 decimal")
    assignedHours: float = Field(..., ge=0, description="Assigned activity hours, 1 decimal")
    utilizationRate: float = Field(
        ...,
        ge=0,
        description="assigned / planned x 100, 1 decimal; 0 when nothing was planned"
    )


class DailySeriesResult(BaseModel):
    """Ordered daily series plus range totals."""
    data: List[DailySeriesPoint] = Field(
        default_factory=list,
        description="One point per day present in either source, ascending"
    )
    totalPlannedHours: float = Field(default=0.0, ge=0)
    totalAssignedHours: float = Field(default=0.0, ge=0)
    averageUtilizationRate: float = Field(
        default=0.0,
        ge=0,
        description="Weighted over the range: total assigned / total planned x 100"
    )
    warnings: List[FilterWarning] = Field(
        default_factory=list,
        description="Filter values that were ignored"
    )


class DailySeriesErrorResponse(DailySeriesResult):
    """
    Failure payload for the daily breakdown.

    Keeps the empty result shape so the frontend can render it, while `error`
    tells it the data is unavailable rather than zero.
    """
    error: str = Field(..., description="validation_error or storage_error")
    message: str = Field(..., description="Failure description")


# =============================================================================
# Reference Data and Headcount
# =============================================================================


class ReferenceItem(BaseModel):
    """Generic {id, name} entry used by the filter dropdowns."""
    id: int
    name: str


class AgentRecord(BaseModel):
    """Active agent with contract and organisation labels."""
    id: int
    contractType: str = Field(..., description="Contract nature label (CDI, CDD, ...)")
    contract: Optional[str] = Field(default=None, description="Contract name")
    departureDate: Optional[DateType] = None
    email: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    siteName: Optional[str] = None
    teamName: Optional[str] = None
    groupName: Optional[str] = None
    experienceName: Optional[str] = None
    contextName: Optional[str] = None


class AgentCountKpi(BaseModel):
    totalAgents: int = Field(..., ge=0)


class SiteCountKpi(BaseModel):
    totalSites: int = Field(..., ge=0)


class TeamCountKpi(BaseModel):
    totalTeams: int = Field(..., ge=0)


class ActivityCountKpi(BaseModel):
    totalActivities: int = Field(..., ge=0)


# =============================================================================
# Skills
# =============================================================================


class SkillsMatrixRow(BaseModel):
    activityId: int
    activityName: str
    levels: Dict[str, int] = Field(..., description="Agent count per level label")


class SkillsMatrix(BaseModel):
    """Agent count per (activity, skill level)."""
    activities: List[ReferenceItem] = Field(default_factory=list)
    levels: List[str] = Field(default_factory=list)
    data: List[SkillsMatrixRow] = Field(default_factory=list)


class AgentSkill(BaseModel):
    lastName: Optional[str] = None
    firstName: Optional[str] = None
    activityName: str
    level: int = Field(..., ge=0)
    levelLabel: SkillLevel


# =============================================================================
# Activity Staffing
# =============================================================================


class ActivityStaffingSlot(BaseModel):
    """Target sizing of one activity slot against the agents assigned to it."""
    id: int
    name: str
    date: DateType
    dayOfWeek: str
    time: str = Field(..., description="Slot start time, HH:MM:SS")
    target: int
    min: Optional[int] = Field(default=None, description="Null when unbounded")
    max: Optional[int] = Field(default=None, description="Null when unbounded")
    count: int = Field(..., ge=0)
    delta: int = Field(..., description="count - target")


# =============================================================================
# Planning Reports
# =============================================================================


class ScheduleSummary(BaseModel):
    totalAgents: int = Field(..., ge=0)
    totalSites: int = Field(..., ge=0)
    totalTeams: int = Field(..., ge=0)
    activeActivities: int = Field(..., ge=0)


class ActivityRepartitionRow(BaseModel):
    """Assigned time on one activity for one day."""
    id: int
    name: str
    date: DateType
    durationSeconds: int = Field(..., ge=0)
    durationHours: float = Field(..., ge=0)


class ScheduleRepartitionRow(BaseModel):
    """Working window of one agent on one day."""
    id: int
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    date: DateType
    startSeconds: int = Field(..., ge=0)
    endSeconds: int = Field(..., ge=0)
    schedule: str = Field(..., description="'HH:MM - HH:MM'")


class AgentOccupancyRow(BaseModel):
    agentId: int
    lastName: Optional[str] = None
    firstName: Optional[str] = None
    planned: float = Field(..., ge=0, description="Planned hours, 1 decimal")
    assigned: float = Field(..., ge=0, description="Assigned hours, 1 decimal")
    occupancyRate: float = Field(..., ge=0, description="Percent, 0 when nothing was planned")


class AgentAssignmentRatioRow(BaseModel):
    agentId: int
    name: str = Field(..., description="Activity name")
    lastName: Optional[str] = None
    firstName: Optional[str] = None
    assigned: float = Field(..., ge=0, description="Hours on this activity, 1 decimal")
    planned: float = Field(..., ge=0, description="Agent planned hours over the range, 1 decimal")
    ratio: Optional[float] = Field(
        default=None,
        description="assigned / planned, 3 decimals; null when nothing was planned"
    )


class HealthResponse(BaseModel):
    status: HealthStatus
    timestamp: datetime
