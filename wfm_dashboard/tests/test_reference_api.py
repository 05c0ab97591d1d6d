"""
HTTP tests for reference data, headcount KPIs, skills, staffing and the
service endpoints.
"""

from unittest.mock import AsyncMock, patch

import pytest

from wfm_dashboard.core.dependencies import get_db_session
from wfm_dashboard.core.exceptions import StorageError
from wfm_dashboard.main import app


@pytest.mark.api
class TestReferenceEndpoints:

    def test_sites(self, client, mock_conn) -> None:
        mock_conn.fetch.return_value = [{'id': 2, 'name': "Lyon"}, {'id': 1, 'name': "Paris"}]

        response = client.get("/api/sites")

        assert response.status_code == 200
        assert response.json() == [{"id": 2, "name": "Lyon"}, {"id": 1, "name": "Paris"}]
        assert "FROM site" in mock_conn.fetch.call_args.args[0]

    def test_groups_read_agent_group_table(self, client, mock_conn) -> None:
        client.get("/api/groups")

        assert "FROM agent_group" in mock_conn.fetch.call_args.args[0]

    def test_agents_with_contract_label(self, client, mock_conn) -> None:
        mock_conn.fetch.return_value = [
            {
                'id': 7,
                'contract_nature': 2,
                'contract': None,
                'departure_date': None,
                'email': None,
                'first_name': "Paul",
                'last_name': "Durand",
                'site_name': "Lyon",
                'team_name': None,
                'group_name': None,
                'experience_name': None,
                'context_name': None,
            },
        ]

        response = client.get("/api/agents", params={"contractType": "Intérim"})

        assert response.status_code == 200
        assert response.json()[0]["contractType"] == "Intérim"
        assert mock_conn.fetch.call_args.args[1:] == (2,)

    def test_agents_ignore_unknown_contract_type(self, client, mock_conn) -> None:
        response = client.get("/api/agents", params={"contractType": "Freelance"})

        assert response.status_code == 200
        assert mock_conn.fetch.call_args.args[1:] == ()

    def test_storage_failure_is_500(self, client, mock_conn) -> None:
        mock_conn.fetch.side_effect = OSError("connection reset")

        response = client.get("/api/teams")

        assert response.status_code == 500
        assert response.json()["detail"].startswith("Failed to fetch teams")

    def test_session_failure_goes_through_error_handler(self, client) -> None:
        async def failing_session():
            raise StorageError("Database unavailable: connection refused")

        app.dependency_overrides[get_db_session] = failing_session

        response = client.get("/api/sites")

        assert response.status_code == 500
        assert response.json() == {"detail": "Database unavailable: connection refused"}


@pytest.mark.api
class TestKpiEndpoints:

    @pytest.mark.parametrize(
        "path,key",
        [
            ("/api/kpis/agents", "totalAgents"),
            ("/api/kpis/sites", "totalSites"),
            ("/api/kpis/teams", "totalTeams"),
            ("/api/kpis/activities", "totalActivities"),
        ],
    )
    def test_single_count(self, client, mock_conn, path, key) -> None:
        mock_conn.fetch.return_value = [{'total': 4}]

        response = client.get(path)

        assert response.status_code == 200
        assert response.json() == {key: 4}


@pytest.mark.api
class TestSkillsAndStaffingEndpoints:

    def test_skills_matrix(self, client, mock_conn) -> None:
        mock_conn.fetch.return_value = [
            {'activity_id': 1, 'activity_name': "Chat", 'level': 3, 'agent_count': 2},
        ]

        response = client.get("/api/skills/matrix")

        assert response.status_code == 200
        body = response.json()
        assert body["levels"] == ["Aucun", "En cours", "Acquis", "Expert"]
        assert body["data"][0]["levels"]["Expert"] == 2

    def test_staffing_defaults_to_configured_day(self, client, mock_conn) -> None:
        response = client.get("/api/staffing/activity")

        assert response.status_code == 200
        assert response.json() == []
        assert [str(arg) for arg in mock_conn.fetch.call_args.args[1:]] == ["2025-06-30", "2025-06-30"]

    def test_staffing_rejects_invalid_date(self, client) -> None:
        response = client.get("/api/staffing/activity", params={"startDate": "30/06/2025"})

        assert response.status_code == 400


@pytest.mark.api
class TestServiceEndpoints:

    def test_health_connected(self, client) -> None:
        with patch('wfm_dashboard.main.ping', new=AsyncMock(return_value=True)):
            response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "connected"
        assert "timestamp" in response.json()

    def test_health_disconnected(self, client) -> None:
        with patch('wfm_dashboard.main.ping', new=AsyncMock(return_value=False)):
            response = client.get("/api/health")

        assert response.status_code == 500
        assert response.json()["status"] == "disconnected"

    def test_root(self, client) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"
