"""
UserRepository - MongoDB access for the users and reports collections.
"""

from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase

from civic_leaderboard.models.activity import ActivityRecord
from civic_leaderboard.models.user import UserScoringInput


USER_FIELDS = {
    "_id": 1,
    "name": 1,
    "avatar": 1,
    "points": 1,
    "badge": 1,
    "streak": 1,
    "location": 1,
    "role": 1,
}

REPORT_FIELDS = {"reportedBy": 1, "status": 1, "photo": 1, "photos": 1, "createdAt": 1}


def report_to_activity(doc: dict[str, Any]) -> ActivityRecord:
    """Map a reports document to an ActivityRecord."""
    return ActivityRecord(
        report_id=str(doc["_id"]) if doc.get("_id") is not None else None,
        created_at=doc["createdAt"],
        status=doc.get("status") or "Pending",
        has_photo=bool(doc.get("photo") or doc.get("photos")),
    )


def user_to_scoring_input(
    doc: dict[str, Any],
    reports: Optional[list[ActivityRecord]] = None,
    precomputed_points: Optional[int] = None,
) -> UserScoringInput:
    """Map a users document (plus its reports, when loaded) to a UserScoringInput."""
    location = doc.get("location")
    if isinstance(location, dict):
        # Some accounts store a structured address
        location = location.get("address") or location.get("city")

    return UserScoringInput(
        user_id=str(doc["_id"]),
        name=doc.get("name"),
        location=location or None,
        role=doc.get("role", "citizen"),
        stored_points=doc.get("points") or 0,
        precomputed_points=precomputed_points,
        stored_streak=doc.get("streak"),
        stored_badge=doc.get("badge") or None,
        avatar=doc.get("avatar") or None,
        reports=reports,
    )


def _user_filter(user_id: str) -> dict[str, Any]:
    try:
        return {"_id": ObjectId(user_id)}
    except InvalidId:
        return {"_id": user_id}


class UserRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["users"]
        self.reports_collection = db["reports"]

    async def fetch_all_users(self) -> list[UserScoringInput]:
        """All active users, in directory order (reports are not loaded)."""
        docs = await self.collection.find(
            {"isActive": {"$ne": False}},
            USER_FIELDS,
        ).to_list(length=None)
        return [user_to_scoring_input(doc) for doc in docs]

    async def fetch_user_stats(self, user_id: str) -> Optional[UserScoringInput]:
        """A single user with all their reports, or None if not found."""
        user_filter = _user_filter(user_id)
        doc = await self.collection.find_one(user_filter, USER_FIELDS)
        if not doc:
            return None

        report_docs = await self.reports_collection.find(
            {"reportedBy": doc["_id"]},
            REPORT_FIELDS,
        ).to_list(length=None)

        return user_to_scoring_input(doc, [report_to_activity(r) for r in report_docs])
