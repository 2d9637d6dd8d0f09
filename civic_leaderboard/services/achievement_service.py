"""
Achievement definitions shown next to the leaderboard.

Display only: nothing here changes points or ranks.
"""

from civic_leaderboard.models.achievement import AchievementDefinition


ACHIEVEMENTS: tuple[AchievementDefinition, ...] = (
    AchievementDefinition(
        name="First Report",
        description="Submit your first traffic report",
        icon="star",
        rarity="common",
    ),
    AchievementDefinition(
        name="Speed Demon",
        description="Report 10 incidents in one day",
        icon="trending-up",
        rarity="rare",
    ),
    AchievementDefinition(
        name="Community Helper",
        description="Help 100 fellow commuters",
        icon="users",
        rarity="epic",
    ),
    AchievementDefinition(
        name="Perfect Week",
        description="7 days of accurate reporting",
        icon="target",
        rarity="rare",
    ),
    AchievementDefinition(
        name="Local Guardian",
        description="Most reports in your area",
        icon="map-pin",
        rarity="legendary",
    ),
    AchievementDefinition(
        name="Streak Master",
        description="30-day reporting streak",
        icon="calendar",
        rarity="legendary",
    ),
)


async def fetch_achievement_definitions() -> list[AchievementDefinition]:
    """All achievements, in display order"""
    return list(ACHIEVEMENTS)
