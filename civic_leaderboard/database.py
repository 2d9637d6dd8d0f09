"""
Database connection setup - MongoDB

Single place where the Motor client is created and shared
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from civic_leaderboard.core.config import get_settings

logger = logging.getLogger(__name__)


class Database:
    """Singleton holding the MongoDB connection"""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect(cls):
        """Connect to MongoDB"""
        if cls.client is None:
            settings = get_settings()

            cls.client = AsyncIOMotorClient(
                settings.mongodb_uri,
                maxPoolSize=10,
                minPoolSize=2,
            )
            cls.db = cls.client[settings.mongodb_db_name]

            # Connection check
            await cls.client.admin.command("ping")
            logger.info(f"Connected to MongoDB: {settings.mongodb_db_name}")

    @classmethod
    async def disconnect(cls):
        """Close the connection"""
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("Disconnected from MongoDB")

    @classmethod
    def get_db(cls) -> AsyncIOMotorDatabase:
        """Return the database instance"""
        if cls.db is None:
            raise RuntimeError("Database not connected. Call Database.connect() first.")
        return cls.db


async def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency that injects the DB

    Usage:
        @router.get("/leaderboard")
        async def get_leaderboard(db: AsyncIOMotorDatabase = Depends(get_database)):
            repo = LeaderboardRepository(db)
            return await repo.fetch_leaderboard()
    """
    return Database.get_db()


async def create_indexes():
    """
    Create the indexes used by the leaderboard queries

    Run once on deployment or from an init script
    """
    db = Database.get_db()

    # users: citizen listing
    await db.users.create_index([("role", 1), ("isActive", 1)])
    await db.users.create_index([("points", -1)])

    # reports: grouping by author and timeframe filter
    await db.reports.create_index("reportedBy")
    await db.reports.create_index([("createdAt", -1)])
    await db.reports.create_index([("reportedBy", 1), ("createdAt", -1)])

    logger.info("Indexes created successfully")
