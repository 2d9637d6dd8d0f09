"""
Unit tests for UserRepository
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from bson import ObjectId

from civic_leaderboard.repositories.user_repository import (
    REPORT_FIELDS,
    USER_FIELDS,
    UserRepository,
    report_to_activity,
    user_to_scoring_input,
)


USER_ID = ObjectId("65f1a2b3c4d5e6f708091a2b")
CREATED_AT = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def _collection(docs=None, one=None):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=docs or [])
    collection = MagicMock()
    collection.find = MagicMock(return_value=cursor)
    collection.find_one = AsyncMock(return_value=one)
    return collection


class TestDocumentMapping:
    """Test suite for document to model mapping."""

    def test_report_to_activity(self):
        doc = {"_id": ObjectId(), "createdAt": CREATED_AT, "status": "Resolved", "photos": ["a.jpg"]}

        activity = report_to_activity(doc)

        assert activity.report_id == str(doc["_id"])
        assert activity.created_at == CREATED_AT
        assert activity.is_resolved
        assert activity.has_photo

    def test_report_defaults(self):
        activity = report_to_activity({"createdAt": CREATED_AT, "status": None, "photo": ""})

        assert activity.report_id is None
        assert activity.status == "Pending"
        assert activity.has_photo is False

    def test_user_to_scoring_input(self):
        doc = {
            "_id": USER_ID,
            "name": "Asha",
            "avatar": "",
            "points": 120,
            "streak": 4,
            "location": {"address": "Linking Road, Bandra", "city": "Mumbai"},
            "role": "citizen",
        }

        user = user_to_scoring_input(doc)

        assert user.user_id == str(USER_ID)
        assert user.location == "Linking Road, Bandra"
        assert user.stored_points == 120
        assert user.stored_streak == 4
        assert user.stored_badge is None
        assert user.avatar is None
        assert user.reports is None

    def test_location_falls_back_to_city(self):
        user = user_to_scoring_input({"_id": USER_ID, "location": {"city": "Pune"}})

        assert user.location == "Pune"
        assert user.stored_points == 0
        assert user.role == "citizen"


class TestUserRepository:
    """Test suite for UserRepository database operations."""

    @pytest.mark.asyncio
    async def test_fetch_all_users(self):
        users = _collection(docs=[
            {"_id": USER_ID, "name": "Asha", "role": "citizen", "points": 10, "badge": "Bronze Hero"},
            {"_id": "officer-1", "name": "Officer", "role": "authority"},
        ])
        repo = UserRepository({"users": users, "reports": _collection()})

        result = await repo.fetch_all_users()

        users.find.assert_called_once_with({"isActive": {"$ne": False}}, USER_FIELDS)
        assert [u.user_id for u in result] == [str(USER_ID), "officer-1"]
        assert result[0].stored_badge == "Bronze Hero"
        assert result[1].role == "authority"

    @pytest.mark.asyncio
    async def test_fetch_user_stats(self):
        users = _collection(one={"_id": USER_ID, "name": "Asha", "role": "citizen"})
        reports = _collection(docs=[
            {"_id": ObjectId(), "reportedBy": USER_ID, "createdAt": CREATED_AT, "status": "Resolved"},
        ])
        repo = UserRepository({"users": users, "reports": reports})

        result = await repo.fetch_user_stats(str(USER_ID))

        users.find_one.assert_awaited_once_with({"_id": USER_ID}, USER_FIELDS)
        reports.find.assert_called_once_with({"reportedBy": USER_ID}, REPORT_FIELDS)
        assert result.user_id == str(USER_ID)
        assert len(result.reports) == 1
        assert result.reports[0].is_resolved

    @pytest.mark.asyncio
    async def test_fetch_user_stats_string_id(self):
        users = _collection(one=None)
        repo = UserRepository({"users": users, "reports": _collection()})

        result = await repo.fetch_user_stats("not-an-object-id")

        assert result is None
        users.find_one.assert_awaited_once_with({"_id": "not-an-object-id"}, USER_FIELDS)
