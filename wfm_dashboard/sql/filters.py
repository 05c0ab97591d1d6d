"""
Shared agent filter clause for every agent-scoped query.

Queries that use these builders must expose the agent's user row as `u`
(app_user) and its organisation row as `au` (agent_user).

Parameters are asyncpg positional placeholders ($1, $2, ...). Each builder
appends its values to the caller's parameter list and numbers placeholders
from the current list length, so conditions from several builders can be
combined in one query.

Active contract:
    hire_date <= CURRENT_DATE AND (departure_date IS NULL OR departure_date >= CURRENT_DATE)

It is evaluated at query time, not at the date being aggregated.
"""

from typing import Any, List, Optional, Union

from wfm_dashboard.models.schemas import AgentFilter, FilterPredicate


AgentConstraints = Union[AgentFilter, FilterPredicate]


def bind(params: List[Any], value: Any) -> str:
    """Append a value to the parameter list and return its placeholder."""
    params.append(value)
    return f"${len(params)}"


def active_contract_condition(alias: str = "ac") -> str:
    return (
        f"{alias}.hire_date <= CURRENT_DATE "
        f"AND ({alias}.departure_date IS NULL OR {alias}.departure_date >= CURRENT_DATE)"
    )


def build_agent_filter_conditions(
    filters: AgentConstraints,
    params: List[Any],
    contract_alias: Optional[str] = None,
) -> List[str]:
    """
    Build the AND-composed WHERE conditions for the categorical agent filters.

    Without `contract_alias` the active-contract requirement (and the optional
    contract nature) is expressed as an EXISTS sub-select, which keeps one
    output row per source row even when an agent holds several contracts.
    Queries that already join agent_contract pass its alias instead and the
    conditions apply to that row directly.

    Args:
        filters: Normalized categorical constraints; None attributes match any.
        params: Positional parameter list, extended in place.
        contract_alias: Alias of an agent_contract row already in the query.

    Returns:
        List of SQL conditions, never empty.
    """
    where_conditions: List[str] = []

    if contract_alias is None:
        contract_conditions = [
            "acf.agent_id = u.id",
            active_contract_condition("acf"),
        ]
        if filters.contract_code is not None:
            contract_conditions.append(f"acf.contract_nature = {bind(params, filters.contract_code)}")
        where_conditions.append(
            "EXISTS (SELECT 1 FROM agent_contract acf WHERE "
            + " AND ".join(contract_conditions)
            + ")"
        )
    else:
        where_conditions.append(active_contract_condition(contract_alias))
        if filters.contract_code is not None:
            where_conditions.append(
                f"{contract_alias}.contract_nature = {bind(params, filters.contract_code)}"
            )

    if filters.site_id is not None:
        where_conditions.append(f"u.site_id = {bind(params, filters.site_id)}")

    if filters.team_id is not None:
        where_conditions.append(f"au.team_id = {bind(params, filters.team_id)}")

    if filters.group_id is not None:
        where_conditions.append(f"au.group_id = {bind(params, filters.group_id)}")

    if filters.experience_id is not None:
        where_conditions.append(f"au.experience_id = {bind(params, filters.experience_id)}")

    if filters.context_id is not None:
        where_conditions.append(f"au.context_id = {bind(params, filters.context_id)}")

    return where_conditions
