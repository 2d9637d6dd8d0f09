"""
Rank aggregation - turns per-user scoring snapshots into a ranked leaderboard.

Pure and deterministic: the same inputs always give the same entries, so a
"refresh" is just another call with a new snapshot.
"""

from datetime import timezone, tzinfo
from typing import Iterable, Optional

from civic_leaderboard.models.leaderboard import LeaderboardEntry, RankedLeaderboard
from civic_leaderboard.models.user import UserScoringInput
from civic_leaderboard.services.avatar_service import normalize_avatar_reference
from civic_leaderboard.services.badge_service import level_for_points, resolve_badge
from civic_leaderboard.services.points_service import calculate_accuracy, reconcile_points
from civic_leaderboard.services.streak_service import current_streak


DEFAULT_NAME = "Anonymous User"
DEFAULT_LOCATION = "Location not set"


def score_user(
    user: UserScoringInput,
    tz: tzinfo = timezone.utc,
    messages: Optional[dict[str, str]] = None,
) -> LeaderboardEntry:
    """
    Build the (unranked) leaderboard entry for one user.

    The stored streak is only used when no reports were supplied at all.
    """
    points = reconcile_points(user.stored_points, user.precomputed_points)
    badge = resolve_badge(points, messages)

    if user.reports is not None:
        streak = current_streak(user.reports, tz)
    else:
        streak = max(user.stored_streak or 0, 0)

    report_count = user.report_count
    if report_count is None:
        report_count = len(user.reports) if user.reports is not None else 0

    accuracy = user.accuracy
    if accuracy is None:
        accuracy = calculate_accuracy(user.reports) if user.reports else 0

    return LeaderboardEntry(
        user_id=user.user_id,
        name=user.name or DEFAULT_NAME,
        location=user.location or DEFAULT_LOCATION,
        avatar=normalize_avatar_reference(user.avatar),
        points=points,
        badge=badge.badge,
        next_badge=badge.next_badge,
        progress=badge.progress,
        remaining_message=badge.remaining_message,
        level=level_for_points(points),
        report_count=report_count,
        accuracy=accuracy,
        streak=streak,
        rank=1,  # replaced by assign_ranks
    )


def assign_ranks(entries: Iterable[LeaderboardEntry]) -> list[LeaderboardEntry]:
    """
    Sort by points (descending) and number the entries from 1.

    sorted() is stable, so users with the same points keep their input order.
    """
    ordered = sorted(entries, key=lambda entry: entry.points, reverse=True)
    return [
        entry.model_copy(update={"rank": position})
        for position, entry in enumerate(ordered, start=1)
    ]


def build_leaderboard(
    users: Iterable[UserScoringInput],
    limit: int,
    current_user_id: Optional[str] = None,
    current_user_rank: Optional[int] = None,
    *,
    tz: tzinfo = timezone.utc,
    messages: Optional[dict[str, str]] = None,
) -> RankedLeaderboard:
    """
    Rank users and locate the current user.

    Args:
        users: Scoring snapshots, in the order the source returned them
        limit: Maximum number of entries to return
        current_user_id: User whose position should be reported
        current_user_rank: Rank supplied by the source; wins over the computed one
        tz: Time zone used to compute streak calendar days
        messages: Optional translations for the badge messages

    Returns:
        RankedLeaderboard with at most `limit` entries
    """
    ranked = assign_ranks(score_user(user, tz, messages) for user in users)

    current_user = None
    if current_user_id is not None:
        current_user = next(
            (entry for entry in ranked if entry.user_id == current_user_id),
            None,
        )

    # The position is looked up before truncating so users outside the top N still get one
    if current_user_rank is None and current_user is not None:
        current_user_rank = current_user.rank

    return RankedLeaderboard(
        entries=ranked[: max(limit, 0)],
        current_user_rank=current_user_rank,
        current_user=current_user,
    )
