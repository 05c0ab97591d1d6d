"""
Tests for the planning, staffing and reference report services.

Each service runs its queries in a fixed order on the mocked connection, so
results are fed through mock_conn.fetch.side_effect in that order.
"""

from datetime import date, datetime

import pytest

from wfm_dashboard.core.exceptions import StorageError
from wfm_dashboard.models.schemas import AgentFilter, FilterPredicate
from wfm_dashboard.services.planning import (
    fetch_agent_names,
    get_activity_repartition,
    get_agent_assignment_ratios,
    get_agent_occupancy,
    get_max_agents,
    get_schedule_repartition,
    get_schedule_summary,
)
from wfm_dashboard.services.reference import (
    contract_label,
    count_active_sites,
    list_active_agents,
)
from wfm_dashboard.services.staffing import INT32_MAX, INT32_MIN, get_activity_staffing


MONDAY = date(2025, 7, 7)
TUESDAY = date(2025, 7, 8)

WEEK = FilterPredicate(start_date=MONDAY, end_date=date(2025, 7, 13))


def name_row(agent_id, first_name, last_name):
    return {'id': agent_id, 'first_name': first_name, 'last_name': last_name}


# ============================================================
# NAME LOOKUPS
# ============================================================

class TestNameLookups:

    @pytest.mark.asyncio
    async def test_no_ids_issues_no_query(self, mock_conn) -> None:
        assert await fetch_agent_names(mock_conn, []) == {}
        mock_conn.fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_ids_are_deduplicated(self, mock_conn) -> None:
        mock_conn.fetch.return_value = [name_row(2, "Léa", "Martin")]

        names = await fetch_agent_names(mock_conn, [2, 2, 2])

        assert names == {2: ("Léa", "Martin")}
        assert mock_conn.fetch.call_args.args[1] == [2]


# ============================================================
# OCCUPANCY AND RATIOS
# ============================================================

class TestAgentOccupancy:

    @pytest.mark.asyncio
    async def test_planned_and_assigned_per_agent(self, mock_conn, schedule_row, assignment_row) -> None:
        mock_conn.fetch.side_effect = [
            [schedule_row(1, MONDAY, 28800, 61200, 43200, 46800)],
            [assignment_row(1, 3, "2025-07-07T09:00:00", "2025-07-07T13:00:00")],
            [name_row(1, "Léa", "Martin")],
        ]

        rows = await get_agent_occupancy(mock_conn, WEEK)

        assert len(rows) == 1
        assert rows[0].planned == 8.0
        assert rows[0].assigned == 4.0
        assert rows[0].occupancyRate == 50.0
        assert rows[0].lastName == "Martin"

    @pytest.mark.asyncio
    async def test_agents_from_either_source_appear(self, mock_conn, schedule_row, assignment_row) -> None:
        mock_conn.fetch.side_effect = [
            [schedule_row(1, MONDAY, 28800, 32400)],
            [assignment_row(2, 3, "2025-07-08T09:00:00", "2025-07-08T10:00:00")],
            [name_row(1, "Léa", "Martin"), name_row(2, "Paul", "Durand")],
        ]

        rows = await get_agent_occupancy(mock_conn, WEEK)

        assert [row.agentId for row in rows] == [1, 2]
        assert rows[0].assigned == 0.0
        assert rows[0].occupancyRate == 0.0
        # Assigned without a schedule: rate is 0, not a division error
        assert rows[1].planned == 0.0
        assert rows[1].occupancyRate == 0.0

    @pytest.mark.asyncio
    async def test_activity_narrows_assignments_only(self, mock_conn) -> None:
        predicate = FilterPredicate(start_date=MONDAY, end_date=MONDAY, activity_id=6)
        mock_conn.fetch.side_effect = [[], []]

        await get_agent_occupancy(mock_conn, predicate)

        schedule_call, assignment_call = mock_conn.fetch.call_args_list
        assert 6 not in schedule_call.args[1:]
        assert assignment_call.args[-1] == 6


class TestAgentAssignmentRatios:

    @pytest.mark.asyncio
    async def test_ratio_of_planned_time(self, mock_conn, schedule_row, assignment_row) -> None:
        mock_conn.fetch.side_effect = [
            [
                assignment_row(1, 3, "2025-07-07T09:00:00", "2025-07-07T10:00:00"),
                assignment_row(1, 4, "2025-07-07T10:00:00", "2025-07-07T12:00:00"),
            ],
            [schedule_row(1, MONDAY, 0, 10800), schedule_row(1, TUESDAY, 0, 10800)],
            [name_row(1, "Léa", "Martin")],
            [{'id': 3, 'name': "Appels entrants"}, {'id': 4, 'name': "Back office"}],
        ]

        rows = await get_agent_assignment_ratios(mock_conn, WEEK)

        assert [row.name for row in rows] == ["Appels entrants", "Back office"]
        assert rows[0].planned == 6.0
        assert rows[0].ratio == 0.167
        assert rows[1].ratio == 0.333

    @pytest.mark.asyncio
    async def test_ratio_is_null_without_planned_time(self, mock_conn, assignment_row) -> None:
        mock_conn.fetch.side_effect = [
            [assignment_row(5, 3, "2025-07-07T09:00:00", "2025-07-07T10:00:00")],
            [],
            [name_row(5, "Paul", "Durand")],
            [{'id': 3, 'name': "Appels entrants"}],
        ]

        rows = await get_agent_assignment_ratios(mock_conn, WEEK)

        assert rows[0].assigned == 1.0
        assert rows[0].planned == 0.0
        assert rows[0].ratio is None


# ============================================================
# REPARTITIONS
# ============================================================

class TestRepartitions:

    @pytest.mark.asyncio
    async def test_activity_repartition(self, mock_conn, assignment_row) -> None:
        mock_conn.fetch.side_effect = [
            [
                assignment_row(1, 4, "2025-07-08T09:00:00", "2025-07-08T10:00:00"),
                assignment_row(1, 3, "2025-07-07T09:00:00", "2025-07-07T10:00:00"),
                assignment_row(2, 3, "2025-07-07T10:00:00", "2025-07-07T10:30:00"),
            ],
            [{'id': 3, 'name': "Chat"}, {'id': 4, 'name': "Appels"}],
        ]

        rows = await get_activity_repartition(mock_conn, WEEK)

        assert [(row.date, row.name) for row in rows] == [(MONDAY, "Chat"), (TUESDAY, "Appels")]
        assert rows[0].durationSeconds == 5400
        assert rows[0].durationHours == 1.5

    @pytest.mark.asyncio
    async def test_schedule_repartition_window(self, mock_conn, schedule_row) -> None:
        mock_conn.fetch.side_effect = [
            [schedule_row(1, MONDAY, 30600, 43200), schedule_row(1, MONDAY, 46800, 61200)],
            [name_row(1, "Léa", "Martin")],
        ]

        rows = await get_schedule_repartition(mock_conn, WEEK)

        assert len(rows) == 1
        assert rows[0].schedule == "08:30 - 17:00"
        assert rows[0].firstName == "Léa"

    @pytest.mark.asyncio
    async def test_empty_repartition_skips_name_lookup(self, mock_conn) -> None:
        mock_conn.fetch.side_effect = [[]]

        assert await get_schedule_repartition(mock_conn, WEEK) == []
        assert mock_conn.fetch.call_count == 1


# ============================================================
# HEADCOUNTS
# ============================================================

class TestHeadcounts:

    @pytest.mark.asyncio
    async def test_schedule_summary(self, mock_conn) -> None:
        mock_conn.fetch.return_value = [
            {'total_agents': 12, 'total_sites': 2, 'total_teams': 4, 'active_activities': 7},
        ]

        summary = await get_schedule_summary(mock_conn, AgentFilter())

        assert summary.totalAgents == 12
        assert summary.activeActivities == 7

    @pytest.mark.asyncio
    async def test_max_agents_ignores_activity(self, mock_conn) -> None:
        mock_conn.fetch.return_value = [{'total_agents': 9}]
        predicate = FilterPredicate(start_date=MONDAY, end_date=MONDAY, activity_id=6)

        kpi = await get_max_agents(mock_conn, predicate)

        assert kpi.totalAgents == 9
        assert 6 not in mock_conn.fetch.call_args.args[1:]

    @pytest.mark.asyncio
    async def test_count_with_null_total(self, mock_conn) -> None:
        mock_conn.fetch.return_value = [{'total': None}]

        assert (await count_active_sites(mock_conn)).totalSites == 0

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(self, mock_conn) -> None:
        mock_conn.fetch.side_effect = OSError("connection reset")

        with pytest.raises(StorageError):
            await get_schedule_summary(mock_conn, AgentFilter())


# ============================================================
# STAFFING AND AGENTS
# ============================================================

class TestActivityStaffing:

    @pytest.mark.asyncio
    async def test_slot_delta_and_bounds(self, mock_conn) -> None:
        mock_conn.fetch.return_value = [
            {
                'id': 10,
                'activity_name': "Appels entrants",
                'begin_at': datetime(2025, 6, 30, 9, 30),
                'size': 5,
                'min_size': INT32_MIN,
                'max_size': 8,
                'assigned_count': 3,
            },
            {
                'id': 11,
                'activity_name': "Chat",
                'begin_at': datetime(2025, 6, 30, 10, 0),
                'size': 2,
                'min_size': 1,
                'max_size': INT32_MAX,
                'assigned_count': None,
            },
        ]

        slots = await get_activity_staffing(mock_conn, date(2025, 6, 30), date(2025, 6, 30))

        assert slots[0].time == "09:30:00"
        assert slots[0].dayOfWeek == "Lundi"
        assert slots[0].min is None
        assert slots[0].max == 8
        assert slots[0].delta == -2
        assert slots[1].count == 0
        assert slots[1].max is None
        assert slots[1].delta == -2


class TestActiveAgents:

    @pytest.mark.parametrize("code,label", [(0, "CDI"), (2, "Intérim"), (5, "Autre"), (9, "Inconnu"), (None, "Inconnu")])
    def test_contract_label(self, code, label) -> None:
        assert contract_label(code) == label

    @pytest.mark.asyncio
    async def test_agent_rows(self, mock_conn) -> None:
        mock_conn.fetch.return_value = [
            {
                'id': 1,
                'contract_nature': 1,
                'contract': "CDD 6 mois",
                'departure_date': date(2025, 12, 31),
                'email': "lea.martin@example.com",
                'first_name': "Léa",
                'last_name': "Martin",
                'site_name': "Lyon",
                'team_name': "Équipe A",
                'group_name': None,
                'experience_name': "Confirmé",
                'context_name': None,
            },
        ]

        agents = await list_active_agents(mock_conn, AgentFilter(site_id=1))

        assert agents[0].contractType == "CDD"
        assert agents[0].groupName is None
        assert agents[0].departureDate == date(2025, 12, 31)
