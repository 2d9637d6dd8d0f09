"""
Integration tests for the leaderboard, stats, description and health endpoints
"""

import pytest

from civic_leaderboard.core.config import get_settings


class TestLeaderboardEndpoints:
    """Test suite for /leaderboard endpoints."""

    @pytest.mark.asyncio
    async def test_get_leaderboard_anonymous(self, client, leaderboard_source):
        """Test GET /leaderboard without a token"""
        response = await client.get("/leaderboard")

        assert response.status_code == 200
        data = response.json()
        assert [e["user_id"] for e in data["leaderboard"]] == ["u200", "u100", "u50"]
        assert [e["rank"] for e in data["leaderboard"]] == [1, 2, 3]
        assert data["user_rank"] is None
        assert data["timeframe"] == "all"
        assert data["total_users"] == 3
        assert data["is_fallback"] is False
        leaderboard_source.fetch_leaderboard.assert_awaited_once_with("all", get_settings().leaderboard_default_limit)

    @pytest.mark.asyncio
    async def test_get_leaderboard_with_token(self, client, auth_headers):
        """Test GET /leaderboard reports the caller's rank"""
        response = await client.get("/leaderboard", params={"limit": 1}, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert len(data["leaderboard"]) == 1
        assert data["user_rank"] == 3
        assert data["current_user"]["user_id"] == "u50"

    @pytest.mark.asyncio
    async def test_invalid_token_is_anonymous(self, client):
        """Test GET /leaderboard with a broken token"""
        response = await client.get("/leaderboard", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 200
        assert response.json()["user_rank"] is None

    @pytest.mark.asyncio
    async def test_entry_shape(self, client):
        """Test leaderboard entries carry badge progress"""
        response = await client.get("/leaderboard")

        entry = response.json()["leaderboard"][0]
        assert entry["points"] == 200
        assert entry["badge"] == "Bronze Hero"
        assert entry["next_badge"] == "Silver Scout"
        assert entry["progress"] == 25
        assert entry["remaining_message"] == "300 pts to Silver Scout"
        assert entry["avatar"] == "👤"

    @pytest.mark.asyncio
    async def test_timeframe_is_passed(self, client, leaderboard_source):
        """Test GET /leaderboard?timeframe=week"""
        response = await client.get("/leaderboard", params={"timeframe": "week", "limit": 5})

        assert response.status_code == 200
        assert response.json()["timeframe"] == "week"
        leaderboard_source.fetch_leaderboard.assert_awaited_once_with("week", 5)

    @pytest.mark.asyncio
    async def test_invalid_timeframe(self, client):
        """Test GET /leaderboard with an unknown timeframe"""
        response = await client.get("/leaderboard", params={"timeframe": "decade"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_limit_out_of_range(self, client):
        """Test GET /leaderboard with limit=0"""
        response = await client.get("/leaderboard", params={"limit": 0})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_fallback_when_source_fails(self, client, leaderboard_source):
        """Test GET /leaderboard still answers when the report store is down"""
        leaderboard_source.fetch_leaderboard.side_effect = ConnectionError("database down")

        response = await client.get("/leaderboard")

        assert response.status_code == 200
        data = response.json()
        assert data["is_fallback"] is True
        assert len(data["leaderboard"]) == 10

    @pytest.mark.asyncio
    async def test_get_user_stats(self, client):
        """Test GET /leaderboard/stats/{user_id}"""
        response = await client.get("/leaderboard/stats/c1")

        assert response.status_code == 200
        data = response.json()
        assert data["total_reports"] == 2
        assert data["resolved_reports"] == 1
        assert data["accuracy"] == 50
        assert data["current_streak"] == 2
        assert data["points"] == 25
        assert data["badge"]["badge"] == "Rising Star"

    @pytest.mark.asyncio
    async def test_get_user_stats_not_found(self, client):
        """Test GET /leaderboard/stats/{user_id} for an unknown user"""
        response = await client.get("/leaderboard/stats/nobody")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_user_stats_not_citizen(self, client):
        """Test GET /leaderboard/stats/{user_id} for an authority account"""
        response = await client.get("/leaderboard/stats/a1")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_get_achievements(self, client):
        """Test GET /leaderboard/achievements"""
        response = await client.get("/leaderboard/achievements")

        assert response.status_code == 200
        achievements = response.json()["achievements"]
        assert len(achievements) == 6
        assert achievements[0]["name"] == "First Report"
        assert {a["rarity"] for a in achievements} == {"common", "rare", "epic", "legendary"}


class TestDescriptionEndpoints:
    """Test suite for /descriptions."""

    @pytest.mark.asyncio
    async def test_generate_description(self, client, description_service):
        """Test POST /descriptions"""
        response = await client.post(
            "/descriptions",
            json={"report_type": "Pothole", "location": "MG Road", "severity": "high"},
        )

        assert response.status_code == 200
        assert response.json()["description"] == "INCIDENT TYPE\nPothole"
        description_service.generate_description.assert_awaited_once_with("Pothole", "MG Road", "high", None)

    @pytest.mark.asyncio
    async def test_generation_failure_returns_template(self, client, description_service):
        """Test POST /descriptions when the AI service fails"""
        from civic_leaderboard.services.description_service import DescriptionGenerationError

        description_service.generate_description.side_effect = DescriptionGenerationError("timeout")

        response = await client.post("/descriptions", json={"report_type": "Accident"})

        assert response.status_code == 503
        detail = response.json()["detail"]
        assert "timeout" in detail["message"]
        assert detail["template"].startswith("INCIDENT TYPE\nAccident")

    @pytest.mark.asyncio
    async def test_missing_report_type(self, client):
        """Test POST /descriptions validation"""
        response = await client.post("/descriptions", json={"report_type": ""})
        assert response.status_code == 422


class TestHealthEndpoints:
    """Test suite for /health and /."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "disconnected"}

    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "Civic Leaderboard API"
