"""
Fixtures for integration tests
"""

import random

import pytest
from httpx import ASGITransport, AsyncClient
from unittest.mock import AsyncMock, MagicMock

from civic_leaderboard.core.dependencies import (
    get_description_service,
    get_leaderboard_service,
    get_stats_service,
)
from civic_leaderboard.main import app
from civic_leaderboard.models.leaderboard import LeaderboardSnapshot
from civic_leaderboard.models.user import UserScoringInput
from civic_leaderboard.services.fallback_service import FallbackSynthesizer
from civic_leaderboard.services.leaderboard_service import LeaderboardService
from civic_leaderboard.services.stats_service import StatsService


@pytest.fixture
def leaderboard_source(sample_users):
    """Leaderboard source returning the three sample citizens."""
    source = MagicMock()
    source.fetch_leaderboard = AsyncMock(return_value=LeaderboardSnapshot(entries=sample_users))
    return source


@pytest.fixture
def stats_source(make_report):
    """Stats source knowing one citizen and one authority."""
    users = {
        "c1": UserScoringInput(
            user_id="c1",
            name="Citizen One",
            stored_points=0,
            reports=[make_report(0, status="Resolved"), make_report(1)],
        ),
        "a1": UserScoringInput(user_id="a1", name="Officer", role="authority"),
    }
    source = MagicMock()
    source.fetch_user_stats = AsyncMock(side_effect=lambda user_id: users.get(user_id))
    return source


@pytest.fixture
def description_service():
    service = MagicMock()
    service.generate_description = AsyncMock(return_value="INCIDENT TYPE\nPothole")
    return service


@pytest.fixture
async def client(leaderboard_source, stats_source, description_service):
    """
    HTTP client for testing API endpoints.

    Services are built on mocked sources, so no database is needed.
    """
    app.dependency_overrides[get_leaderboard_service] = lambda: LeaderboardService(
        leaderboard_source,
        synthesizer=FallbackSynthesizer(random.Random(0)),
    )
    app.dependency_overrides[get_stats_service] = lambda: StatsService(stats_source)
    app.dependency_overrides[get_description_service] = lambda: description_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Bearer token for citizen u50."""
    from civic_leaderboard.core.security import create_access_token

    token = create_access_token("u50")
    return {"Authorization": f"Bearer {token}"}
