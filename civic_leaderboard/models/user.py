from typing import Optional
from pydantic import BaseModel

from .activity import ActivityRecord


class UserScoringInput(BaseModel):
    """
    Per-user snapshot assembled from upstream data.

    Everything except user_id is optional: missing values get defaults
    when the leaderboard is built, they are never an error.
    """

    user_id: str
    name: Optional[str] = None
    location: Optional[str] = None
    role: str = "citizen"

    stored_points: int = 0
    precomputed_points: Optional[int] = None

    report_count: Optional[int] = None
    accuracy: Optional[float] = None
    stored_streak: Optional[int] = None
    stored_badge: Optional[str] = None

    avatar: Optional[str] = None  # URL, emoji or nothing

    # None means "not supplied", an empty list means "no activity"
    reports: Optional[list[ActivityRecord]] = None
