"""
Points - recompute points from reports and reconcile them with the stored total.

Point system (genuine reports only, "Fake Report" earns nothing):
- 10 points: each report
- +5 points: report was resolved
- +2 points: report has a photo
"""

from typing import Iterable, Optional

from civic_leaderboard.models.activity import ActivityRecord


POINTS_PER_REPORT = 10
RESOLVED_BONUS = 5
PHOTO_BONUS = 2


def reconcile_points(stored: int, precomputed: Optional[int] = None) -> int:
    """
    Canonical point total for a user.

    The recomputed value can undercount when only part of the reports were
    loaded, so the larger value wins. Points never go down here.
    """
    return max(stored or 0, precomputed or 0)


def calculate_report_points(reports: Iterable[ActivityRecord]) -> int:
    """Points earned by a set of reports"""
    points = 0
    for report in reports:
        if report.is_fake:
            continue

        points += POINTS_PER_REPORT
        if report.is_resolved:
            points += RESOLVED_BONUS
        if report.has_photo:
            points += PHOTO_BONUS

    return points


def calculate_accuracy(reports: Iterable[ActivityRecord]) -> int:
    """Percentage of reports that got resolved (0-100)"""
    reports = list(reports)
    if not reports:
        return 0

    resolved = sum(1 for report in reports if report.is_resolved)
    return round(resolved / len(reports) * 100)
