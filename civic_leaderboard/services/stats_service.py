"""
StatsService - statistics for a single citizen.
"""

from datetime import timezone, tzinfo
from typing import Optional, Protocol

from civic_leaderboard.models.stats import UserStats
from civic_leaderboard.models.user import UserScoringInput
from civic_leaderboard.services.avatar_service import normalize_avatar_reference
from civic_leaderboard.services.badge_service import level_for_points, resolve_badge
from civic_leaderboard.services.points_service import (
    calculate_accuracy,
    calculate_report_points,
    reconcile_points,
)
from civic_leaderboard.services.ranking_service import DEFAULT_LOCATION, DEFAULT_NAME
from civic_leaderboard.services.streak_service import current_streak, longest_streak


class StatsServiceError(Exception):
    """Base exception for stats service errors."""
    pass


class UserNotFoundError(StatsServiceError):
    """Raised when the user does not exist."""
    pass


class NotCitizenError(StatsServiceError):
    """Raised when stats are requested for an authority or admin account."""
    pass


class UserStatsSource(Protocol):
    async def fetch_user_stats(self, user_id: str) -> Optional[UserScoringInput]:
        ...


class StatsService:
    def __init__(self, source: UserStatsSource, tz: tzinfo = timezone.utc):
        self.source = source
        self.tz = tz

    async def get_user_stats(self, user_id: str) -> UserStats:
        """
        Get stats for a single citizen.

        Raises:
            UserNotFoundError: unknown user
            NotCitizenError: user is not a citizen
        """
        user = await self.source.fetch_user_stats(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        if user.role != "citizen":
            raise NotCitizenError("Statistics only available for citizens")

        reports = user.reports or []
        precomputed = user.precomputed_points
        if precomputed is None:
            precomputed = calculate_report_points(reports)

        points = reconcile_points(user.stored_points, precomputed)

        return UserStats(
            user_id=user.user_id,
            name=user.name or DEFAULT_NAME,
            location=user.location or DEFAULT_LOCATION,
            avatar=normalize_avatar_reference(user.avatar),
            total_reports=len(reports),
            resolved_reports=sum(1 for r in reports if r.is_resolved),
            fake_reports=sum(1 for r in reports if r.is_fake),
            accuracy=calculate_accuracy(reports),
            current_streak=current_streak(reports, self.tz),
            longest_streak=longest_streak(reports, self.tz),
            points=points,
            level=level_for_points(points),
            badge=resolve_badge(points),
            last_report_at=max((r.created_at for r in reports), default=None),
        )
