"""
FallbackSynthesizer - builds a believable leaderboard when the real one is unavailable.

Degrades in two steps:
1. Real citizens from the user directory with made-up secondary stats
2. Fully synthetic sample users

Every result produced here is fallback data and must be flagged as such
by the caller.
"""

import random
from typing import Iterable, Optional

from civic_leaderboard.models.leaderboard import LeaderboardEntry
from civic_leaderboard.models.user import UserScoringInput
from civic_leaderboard.services.avatar_service import DEFAULT_AVATAR, normalize_avatar_reference
from civic_leaderboard.services.badge_service import level_for_points, resolve_badge
from civic_leaderboard.services.ranking_service import (
    DEFAULT_LOCATION,
    DEFAULT_NAME,
    assign_ranks,
)


FALLBACK_BADGES = (
    "Traffic Guardian",
    "Road Warrior",
    "Safety Champion",
    "Community Hero",
    "Traffic Expert",
)

SAMPLE_NAMES = (
    "Rahul Sharma",
    "Priya Patel",
    "Amit Kumar",
    "Neha Singh",
    "Raj Malhotra",
    "Anjali Verma",
    "Vikram Singh",
    "Pooja Gupta",
    "Arun Kumar",
    "Meera Reddy",
)

SAMPLE_LOCATION = "Mumbai, India"

DIRECTORY_POINTS_STEP = 50
SAMPLE_BASE_POINTS = 1000
SAMPLE_POINTS_STEP = 80
SAMPLE_MAX_JITTER = 49

# Inclusive ranges for made-up stats
DIRECTORY_REPORTS = (1, 20)
DIRECTORY_ACCURACY = (70, 99)
DIRECTORY_STREAK = (1, 10)
SAMPLE_REPORTS = (5, 29)
SAMPLE_ACCURACY = (75, 99)
SAMPLE_STREAK = (1, 15)


class FallbackSynthesizer:
    """
    Produce synthetic leaderboard entries.

    The random source is injectable so tests (or a configured seed) get
    exactly the same data every time.
    """

    def __init__(self, rng: Optional[random.Random] = None, size: int = 10):
        self.rng = rng or random.Random()
        self.size = size

    def _between(self, bounds: tuple[int, int]) -> int:
        return self.rng.randint(*bounds)

    def _entry(
        self,
        user_id: str,
        name: str,
        location: str,
        avatar: str,
        points: int,
        badge: str,
        report_count: int,
        accuracy: float,
        streak: int,
    ) -> LeaderboardEntry:
        progress = resolve_badge(points)
        return LeaderboardEntry(
            user_id=user_id,
            name=name,
            location=location,
            avatar=avatar,
            points=points,
            badge=badge,
            next_badge=progress.next_badge,
            progress=progress.progress,
            remaining_message=progress.remaining_message,
            level=level_for_points(points),
            report_count=report_count,
            accuracy=accuracy,
            streak=streak,
            rank=1,  # replaced by assign_ranks
        )

    def from_directory(self, users: Iterable[UserScoringInput]) -> Optional[list[LeaderboardEntry]]:
        """
        Level 1: real citizens, synthetic stats.

        Returns None when the directory has no citizens so the caller can
        move on to fully synthetic data.
        """
        citizens = [user for user in users if user.role == "citizen"][: self.size]
        if not citizens:
            return None

        entries = []
        for index, user in enumerate(citizens):
            # Spread the points so the list is not one big tie
            points = max(user.stored_points, 0) + index * DIRECTORY_POINTS_STEP

            report_count = user.report_count
            if report_count is None:
                report_count = self._between(DIRECTORY_REPORTS)

            accuracy = user.accuracy
            if accuracy is None:
                accuracy = self._between(DIRECTORY_ACCURACY)

            # Stored streaks and badges are schema defaults ("New Reporter", 0)
            # for most users, so they are always made up here
            streak = self._between(DIRECTORY_STREAK)
            badge = self.rng.choice(FALLBACK_BADGES)

            entries.append(self._entry(
                user_id=user.user_id,
                name=user.name or DEFAULT_NAME,
                location=user.location or DEFAULT_LOCATION,
                avatar=normalize_avatar_reference(user.avatar),
                points=points,
                badge=badge,
                report_count=max(report_count, 0),
                accuracy=min(max(accuracy, 0), 100),
                streak=streak,
            ))

        return assign_ranks(entries)

    def synthesize(self) -> list[LeaderboardEntry]:
        """Level 2: sample users only. Has no dependencies, so it cannot fail."""
        entries = []
        for index in range(self.size):
            name = SAMPLE_NAMES[index % len(SAMPLE_NAMES)]
            points = (
                SAMPLE_BASE_POINTS
                - index * SAMPLE_POINTS_STEP
                + self.rng.randint(0, SAMPLE_MAX_JITTER)
            )

            entries.append(self._entry(
                user_id=f"sample_{index}",
                name=name,
                location=SAMPLE_LOCATION,
                avatar=DEFAULT_AVATAR,
                points=max(points, 0),
                badge=self.rng.choice(FALLBACK_BADGES),
                report_count=self._between(SAMPLE_REPORTS),
                accuracy=self._between(SAMPLE_ACCURACY),
                streak=self._between(SAMPLE_STREAK),
            ))

        return assign_ranks(entries)
