from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from .leaderboard import BadgeProgress


class UserStats(BaseModel):
    """Aggregated statistics for a single citizen"""

    user_id: str
    name: str
    location: str
    avatar: str

    total_reports: int
    resolved_reports: int
    fake_reports: int
    accuracy: float

    current_streak: int
    longest_streak: int

    points: int
    level: int
    badge: BadgeProgress

    last_report_at: Optional[datetime] = None
