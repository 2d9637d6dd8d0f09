"""
Pytest fixtures and configuration for all tests.
"""

import os

# Settings are read at import time by the API modules
os.environ.setdefault("JWT_SECRET", "test-secret-key-at-least-32-chars-long")
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB_NAME", "civic_reports_test")

import pytest
from datetime import datetime, timedelta, timezone

from civic_leaderboard.models.activity import ActivityRecord
from civic_leaderboard.models.user import UserScoringInput


REFERENCE_NOW = datetime(2026, 3, 15, 18, 30, tzinfo=timezone.utc)


def _make_report(days_ago: int = 0, status: str = "Pending", has_photo: bool = False, hour: int = 12) -> ActivityRecord:
    """Report created `days_ago` days before REFERENCE_NOW."""
    created_at = (REFERENCE_NOW - timedelta(days=days_ago)).replace(hour=hour, minute=0)
    return ActivityRecord(
        report_id=f"report_{days_ago}_{hour}",
        created_at=created_at,
        status=status,
        has_photo=has_photo,
    )


@pytest.fixture
def reference_now():
    return REFERENCE_NOW


@pytest.fixture
def make_report():
    """Factory for reports relative to reference_now."""
    return _make_report


@pytest.fixture
def sample_user():
    """Citizen with a few days of consecutive activity."""
    return UserScoringInput(
        user_id="user_a",
        name="A",
        location="Andheri, Mumbai",
        stored_points=1200,
        precomputed_points=1400,
        avatar="https://res.cloudinary.com/demo/image/upload/v1712/avatars/a.jpg",
        reports=[_make_report(0), _make_report(1)],
    )


@pytest.fixture
def sample_users():
    """Three citizens with points 50, 200 and 100 (in that input order)."""
    return [
        UserScoringInput(user_id="u50", name="Fifty", stored_points=50),
        UserScoringInput(user_id="u200", name="TwoHundred", stored_points=200),
        UserScoringInput(user_id="u100", name="Hundred", stored_points=100),
    ]


@pytest.fixture
def directory_users():
    """User directory as returned by the users collection (mixed roles)."""
    return [
        UserScoringInput(user_id="c1", name="Citizen One", stored_points=300),
        UserScoringInput(user_id="auth1", name="Officer", role="authority", stored_points=900),
        UserScoringInput(user_id="c2", name=None, stored_points=300, avatar="🚦"),
        UserScoringInput(
            user_id="c3",
            name="Citizen Three",
            stored_points=10,
            report_count=4,
            accuracy=50,
            stored_streak=2,
            stored_badge="Bronze Hero",
        ),
    ]
