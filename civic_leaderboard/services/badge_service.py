"""
Badge tiers - maps a point total to a badge, progress and "points to next" text.

Tier table (lower bound inclusive):

    Rising Star        0
    Bronze Hero        100
    Silver Scout       500
    Gold Guardian      1500
    Diamond Reporter   3000
    Legendary Master   5000

The badge is the tier the user is in. Progress and the remaining-points
message refer to the tier above it.
"""

from typing import Optional

from civic_leaderboard.models.leaderboard import BadgeProgress


BADGE_TIERS: tuple[tuple[int, str], ...] = (
    (0, "Rising Star"),
    (100, "Bronze Hero"),
    (500, "Silver Scout"),
    (1500, "Gold Guardian"),
    (3000, "Diamond Reporter"),
    (5000, "Legendary Master"),
)

POINTS_PER_LEVEL = 250

DEFAULT_MESSAGES = {
    "points_to_next": "{remaining} pts to {next_badge}",
    "max_level": "Max level reached",
}


def _tier_index(points: int) -> int:
    index = 0
    for i, (threshold, _) in enumerate(BADGE_TIERS):
        if points >= threshold:
            index = i
        else:
            break
    return index


def resolve_badge(points: int, messages: Optional[dict[str, str]] = None) -> BadgeProgress:
    """
    Resolve the badge tier for a point total.

    Args:
        points: Canonical point total (negative values count as 0)
        messages: Optional translations for "points_to_next" and "max_level"

    Returns:
        BadgeProgress with the current badge, the next one and the progress (0-100)
    """
    text = {**DEFAULT_MESSAGES, **(messages or {})}
    points = max(int(points), 0)

    index = _tier_index(points)
    lower, badge = BADGE_TIERS[index]

    # Top tier: nothing left to unlock
    if index == len(BADGE_TIERS) - 1:
        return BadgeProgress(
            badge=badge,
            next_badge=None,
            progress=100.0,
            points_to_next=None,
            remaining_message=text["max_level"],
        )

    upper, next_badge = BADGE_TIERS[index + 1]
    progress = (points - lower) / (upper - lower) * 100
    progress = round(min(max(progress, 0.0), 100.0), 2)
    remaining = upper - points

    return BadgeProgress(
        badge=badge,
        next_badge=next_badge,
        progress=progress,
        points_to_next=remaining,
        remaining_message=text["points_to_next"].format(
            remaining=remaining, next_badge=next_badge
        ),
    )


def level_for_points(points: int) -> int:
    """One level every 250 points, starting at level 1"""
    return max(int(points), 0) // POINTS_PER_LEVEL + 1
