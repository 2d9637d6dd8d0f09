from typing import Literal
from pydantic import BaseModel


class AchievementDefinition(BaseModel):
    """Achievement shown on the leaderboard page (display only, not scored)"""

    name: str
    description: str
    icon: str
    rarity: Literal["common", "rare", "epic", "legendary"]
