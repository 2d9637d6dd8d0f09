"""
LeaderboardRepository - assembles per-citizen scoring snapshots from MongoDB.

Points are recomputed from the reports in the requested timeframe and
handed over next to the stored total; reconciling both is done by the
ranking step, not here.
"""

import calendar
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from civic_leaderboard.models.leaderboard import LeaderboardSnapshot
from civic_leaderboard.repositories.user_repository import (
    REPORT_FIELDS,
    USER_FIELDS,
    report_to_activity,
    user_to_scoring_input,
)
from civic_leaderboard.services.points_service import calculate_accuracy, calculate_report_points


TIMEFRAMES = ("all", "week", "month", "year")

CITIZEN_FILTER = {"role": "citizen", "isActive": True}


def _months_ago(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def timeframe_start(timeframe: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Earliest report date included in a timeframe (None for "all").

    Raises:
        ValueError: unknown timeframe
    """
    if timeframe not in TIMEFRAMES:
        raise ValueError(f"Unknown timeframe: {timeframe}. Expected one of {', '.join(TIMEFRAMES)}")

    now = now or datetime.now(timezone.utc)
    if timeframe == "week":
        return now - timedelta(days=7)
    if timeframe == "month":
        return _months_ago(now, 1)
    if timeframe == "year":
        return _months_ago(now, 12)
    return None


class LeaderboardRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users_collection = db["users"]
        self.reports_collection = db["reports"]

    async def fetch_leaderboard(
        self,
        timeframe: str = "all",
        limit: int = 100,
        now: Optional[datetime] = None,
    ) -> LeaderboardSnapshot:
        """
        Get every active citizen with their reports for the timeframe.

        All citizens are returned (not only `limit`) so the current user's
        position can be found outside the top of the board.
        """
        since = timeframe_start(timeframe, now)
        report_filter: dict[str, Any] = {}
        if since is not None:
            report_filter["createdAt"] = {"$gte": since}

        total_users = await self.users_collection.count_documents(CITIZEN_FILTER)
        users = await self.users_collection.find(CITIZEN_FILTER, USER_FIELDS).to_list(length=None)
        report_docs = await self.reports_collection.find(report_filter, REPORT_FIELDS).to_list(length=None)

        # Group reports by user
        reports_by_user = defaultdict(list)
        for doc in report_docs:
            if doc.get("reportedBy") is None:
                continue
            reports_by_user[str(doc["reportedBy"])].append(report_to_activity(doc))

        entries = []
        for user in users:
            reports = reports_by_user.get(str(user["_id"]), [])
            entry = user_to_scoring_input(
                user,
                reports=reports,
                precomputed_points=calculate_report_points(reports),
            )
            entries.append(entry.model_copy(update={
                "report_count": len(reports),
                "accuracy": calculate_accuracy(reports),
            }))

        return LeaderboardSnapshot(entries=entries, total_users=total_users)
