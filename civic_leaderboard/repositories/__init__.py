from .user_repository import UserRepository
from .leaderboard_repository import LeaderboardRepository

__all__ = [
    "UserRepository",
    "LeaderboardRepository",
]
