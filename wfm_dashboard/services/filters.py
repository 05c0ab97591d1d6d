"""
Filter normalization service.

Turns the raw query parameters of a report into a validated FilterPredicate
(or AgentFilter for reports without a date range).

Rules:
- A missing date (absent or empty) takes the default supplied by the caller.
  The defaults come from Settings at the HTTP edge; nothing is hardcoded here.
- A date that is present but cannot be parsed raises ValidationError.
- end_date before start_date raises ValidationError, after defaulting.
- contractType is a label (CDI, CDD, ...) translated to its numeric code.
  An unknown label applies no contract filter and yields a FilterWarning so
  the caller can see the result set was not narrowed.
- Every other categorical filter is optional; None matches any.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Tuple

from wfm_dashboard.core.exceptions import ValidationError
from wfm_dashboard.models.enums import ContractNature, FilterWarningCode
from wfm_dashboard.models.schemas import (
    AgentFilter,
    DateRangeDefaults,
    FilterPredicate,
    FilterWarning,
)

logger = logging.getLogger(__name__)


@dataclass
class RawReportFilters:
    """Report filters as received from the caller, before validation."""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    site_id: Optional[int] = None
    contract_type: Optional[str] = None
    team_id: Optional[int] = None
    group_id: Optional[int] = None
    experience_id: Optional[int] = None
    context_id: Optional[int] = None
    activity_id: Optional[int] = None


def parse_report_date(value: Optional[str], field: str) -> Optional[date]:
    """
    Parse an ISO calendar date, accepting a full ISO timestamp as well.

    Args:
        value: Raw parameter value.
        field: Parameter name, reported in the error.

    Returns:
        The date, or None when the value is absent or blank.

    Raises:
        ValidationError: If the value is present but not a calendar date.
    """
    if value is None or not value.strip():
        return None

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise ValidationError(f"{field} is not a valid date: {value!r}", field=field) from e


def resolve_contract_code(
    contract_type: Optional[str],
    warnings: List[FilterWarning],
) -> Optional[int]:
    """
    Translate a contract type label into its numeric code.

    Unknown labels append a FilterWarning and return None (no filter).
    """
    if contract_type is None or not contract_type.strip():
        return None

    nature = ContractNature.from_label(contract_type)
    if nature is None:
        logger.warning(f"Ignoring unrecognized contractType filter: {contract_type!r}")
        warnings.append(
            FilterWarning(
                code=FilterWarningCode.UNRECOGNIZED_FILTER_VALUE,
                field="contractType",
                value=contract_type,
                message=f"Unknown contract type '{contract_type}'; no contract filter applied",
            )
        )
        return None

    return nature.code


def normalize_agent_filters(raw: RawReportFilters) -> Tuple[AgentFilter, List[FilterWarning]]:
    """Validate the categorical filters only; dates are ignored."""
    warnings: List[FilterWarning] = []
    agent_filter = AgentFilter(
        site_id=raw.site_id,
        contract_code=resolve_contract_code(raw.contract_type, warnings),
        team_id=raw.team_id,
        group_id=raw.group_id,
        experience_id=raw.experience_id,
        context_id=raw.context_id,
    )
    return agent_filter, warnings


def normalize_filters(
    raw: RawReportFilters,
    defaults: DateRangeDefaults,
) -> Tuple[FilterPredicate, List[FilterWarning]]:
    """
    Produce the FilterPredicate for a date-ranged report.

    Args:
        raw: Filters as received.
        defaults: Dates substituted for missing bounds.

    Returns:
        Tuple of (predicate, warnings).

    Raises:
        ValidationError: On an unparseable date or end_date < start_date.
    """
    start_date = parse_report_date(raw.start_date, "startDate") or defaults.start_date
    end_date = parse_report_date(raw.end_date, "endDate") or defaults.end_date

    if end_date < start_date:
        raise ValidationError(
            f"End date {end_date.isoformat()} cannot be before start date {start_date.isoformat()}",
            field="endDate",
        )

    agent_filter, warnings = normalize_agent_filters(raw)

    predicate = FilterPredicate(
        start_date=start_date,
        end_date=end_date,
        site_id=agent_filter.site_id,
        contract_code=agent_filter.contract_code,
        team_id=agent_filter.team_id,
        group_id=agent_filter.group_id,
        experience_id=agent_filter.experience_id,
        context_id=agent_filter.context_id,
        activity_id=raw.activity_id,
    )
    return predicate, warnings
