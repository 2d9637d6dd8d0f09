from .activity import ActivityRecord
from .user import UserScoringInput
from .avatar import AvatarReference, ImageUrlAvatar, PlaceholderAvatar
from .leaderboard import (
    BadgeProgress,
    LeaderboardEntry,
    LeaderboardResult,
    LeaderboardSnapshot,
    RankedLeaderboard,
)
from .achievement import AchievementDefinition
from .stats import UserStats

__all__ = [
    "ActivityRecord",
    "UserScoringInput",
    "AvatarReference",
    "ImageUrlAvatar",
    "PlaceholderAvatar",
    "BadgeProgress",
    "LeaderboardEntry",
    "LeaderboardResult",
    "LeaderboardSnapshot",
    "RankedLeaderboard",
    "AchievementDefinition",
    "UserStats",
]
