"""
Package initialization file for dashboard models.

Re-exports the enumerations from enums.py and the schemas from schemas.py so
other modules can import them from wfm_dashboard.models directly.

Usage:
    from wfm_dashboard.models import (
        ContractNature,
        FilterPredicate,
        DailySeriesResult,
    )
"""

# =============================================================================
# Enums and lookup tables
# =============================================================================

from wfm_dashboard.models.enums import (
    ContractNature,
    CONTRACT_NATURE_CODES,
    UNKNOWN_CONTRACT_LABEL,
    SkillLevel,
    SKILL_LEVEL_LABELS,
    ReferenceTable,
    FilterWarningCode,
    HealthStatus,
    DAY_NAMES,
)

# =============================================================================
# Schemas
# =============================================================================

from wfm_dashboard.models.schemas import (
    # Internal value objects
    DateRangeDefaults,
    AgentFilter,
    FilterPredicate,
    DayBucket,
    # Source rows
    ScheduleEntry,
    AssignmentEntry,
    # Daily utilization
    FilterWarning,
    DailySeriesPoint,
    DailySeriesResult,
    DailySeriesErrorResponse,
    # Reference data and headcount
    ReferenceItem,
    AgentRecord,
    AgentCountKpi,
    SiteCountKpi,
    TeamCountKpi,
    ActivityCountKpi,
    # Skills
    SkillsMatrixRow,
    SkillsMatrix,
    AgentSkill,
    # Staffing
    ActivityStaffingSlot,
    # Planning reports
    ScheduleSummary,
    ActivityRepartitionRow,
    ScheduleRepartitionRow,
    AgentOccupancyRow,
    AgentAssignmentRatioRow,
    HealthResponse,
)

__all__ = [
    'ContractNature',
    'CONTRACT_NATURE_CODES',
    'UNKNOWN_CONTRACT_LABEL',
    'SkillLevel',
    'SKILL_LEVEL_LABELS',
    'ReferenceTable',
    'FilterWarningCode',
    'HealthStatus',
    'DAY_NAMES',
    'DateRangeDefaults',
    'AgentFilter',
    'FilterPredicate',
    'DayBucket',
    'ScheduleEntry',
    'AssignmentEntry',
    'FilterWarning',
    'DailySeriesPoint',
    'DailySeriesResult',
    'DailySeriesErrorResponse',
    'ReferenceItem',
    'AgentRecord',
    'AgentCountKpi',
    'SiteCountKpi',
    'TeamCountKpi',
    'ActivityCountKpi',
    'SkillsMatrixRow',
    'SkillsMatrix',
    'AgentSkill',
    'ActivityStaffingSlot',
    'ScheduleSummary',
    'ActivityRepartitionRow',
    'ScheduleRepartitionRow',
    'AgentOccupancyRow',
    'AgentAssignmentRatioRow',
    'HealthResponse',
]
