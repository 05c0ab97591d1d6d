"""
Tests for the skills matrix pivot and agent skill rows.
"""

import pandas as pd
import pytest

from wfm_dashboard.models.enums import SKILL_LEVEL_LABELS, SkillLevel
from wfm_dashboard.models.schemas import AgentFilter
from wfm_dashboard.services.skills import build_skills_matrix, get_skills_matrix, list_agent_skills


COLUMNS = ['activity_id', 'activity_name', 'level', 'agent_count']


@pytest.mark.unit
class TestSkillLevel:

    @pytest.mark.parametrize(
        "level,label",
        [(None, "Aucun"), (0, "Aucun"), (1, "En cours"), (2, "Acquis"), (3, "Expert"), (7, "Expert")],
    )
    def test_from_level(self, level, label) -> None:
        assert SkillLevel.from_level(level).value == label

    def test_level_table_order(self) -> None:
        assert SKILL_LEVEL_LABELS == ["Aucun", "En cours", "Acquis", "Expert"]


@pytest.mark.unit
class TestBuildSkillsMatrix:

    def test_pivot_with_level_folding(self) -> None:
        counts = pd.DataFrame(
            [
                (1, "Appels entrants", 0, 3),
                (1, "Appels entrants", 2, 1),
                (1, "Appels entrants", 3, 2),
                (1, "Appels entrants", 5, 1),
                (2, "Back office", 1, 4),
            ],
            columns=COLUMNS,
        )

        matrix = build_skills_matrix(counts)

        assert matrix.levels == SKILL_LEVEL_LABELS
        assert [activity.id for activity in matrix.activities] == [1, 2]
        assert matrix.data[0].levels == {"Aucun": 3, "En cours": 0, "Acquis": 1, "Expert": 3}
        assert matrix.data[1].levels == {"Aucun": 0, "En cours": 4, "Acquis": 0, "Expert": 0}

    def test_activity_without_agents_has_zero_counts(self) -> None:
        counts = pd.DataFrame([(4, "Chat", 0, 0)], columns=COLUMNS)

        matrix = build_skills_matrix(counts)

        assert matrix.data[0].activityName == "Chat"
        assert set(matrix.data[0].levels.values()) == {0}

    def test_empty_counts(self) -> None:
        matrix = build_skills_matrix(pd.DataFrame(columns=COLUMNS))

        assert matrix.activities == []
        assert matrix.data == []
        assert matrix.levels == SKILL_LEVEL_LABELS


class TestSkillServices:

    @pytest.mark.asyncio
    async def test_skills_matrix_from_rows(self, mock_conn) -> None:
        mock_conn.fetch.return_value = [
            {'activity_id': 1, 'activity_name': "Appels entrants", 'level': 0, 'agent_count': 2},
            {'activity_id': 1, 'activity_name': "Appels entrants", 'level': 1, 'agent_count': 1},
        ]

        matrix = await get_skills_matrix(mock_conn, AgentFilter(site_id=1))

        assert matrix.data[0].levels["Aucun"] == 2
        assert matrix.data[0].levels["En cours"] == 1
        assert mock_conn.fetch.call_args.args[1:] == (1,)

    @pytest.mark.asyncio
    async def test_agent_skill_labels(self, mock_conn) -> None:
        mock_conn.fetch.return_value = [
            {'last_name': "Martin", 'first_name': "Léa", 'activity_name': "Chat", 'level': 2},
            {'last_name': "Durand", 'first_name': "Paul", 'activity_name': "Chat", 'level': 4},
        ]

        skills = await list_agent_skills(mock_conn, AgentFilter())

        assert skills[0].levelLabel == SkillLevel.ACQUIRED
        assert skills[1].levelLabel == SkillLevel.EXPERT
