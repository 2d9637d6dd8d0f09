from typing import Optional
from pydantic import BaseModel, Field

from .user import UserScoringInput


class BadgeProgress(BaseModel):
    """Current badge tier plus progress towards the next one"""

    badge: str
    next_badge: Optional[str] = None
    progress: float = Field(ge=0, le=100)
    points_to_next: Optional[int] = None
    remaining_message: str

    class Config:
        frozen = True


class LeaderboardEntry(BaseModel):
    """One ranked row of the leaderboard (derived, never stored)"""

    user_id: str
    name: str
    location: str
    avatar: str

    points: int
    badge: str
    next_badge: Optional[str] = None
    progress: float
    remaining_message: str
    level: int

    report_count: int
    accuracy: float
    streak: int = Field(ge=0)

    rank: int = Field(ge=1)

    class Config:
        frozen = True


class LeaderboardSnapshot(BaseModel):
    """Raw data returned by the leaderboard source"""

    entries: list[UserScoringInput] = []
    current_user_rank: Optional[int] = None
    total_users: Optional[int] = None


class RankedLeaderboard(BaseModel):
    """Output of the rank aggregation step"""

    entries: list[LeaderboardEntry]
    current_user_rank: Optional[int] = None
    current_user: Optional[LeaderboardEntry] = None


class LeaderboardResult(BaseModel):
    """What the leaderboard service hands back to its callers"""

    entries: list[LeaderboardEntry]
    current_user_rank: Optional[int] = None
    current_user: Optional[LeaderboardEntry] = None
    total_users: int = 0
    timeframe: str = "all"
    is_fallback: bool = False
