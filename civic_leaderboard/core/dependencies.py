"""
FastAPI dependencies for authentication, DB and service injection
"""

import random
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from civic_leaderboard.core.config import Settings, get_settings
from civic_leaderboard.core.security import decode_access_token
from civic_leaderboard.database import get_database
from civic_leaderboard.repositories.leaderboard_repository import LeaderboardRepository
from civic_leaderboard.repositories.user_repository import UserRepository
from civic_leaderboard.services.description_service import DescriptionService
from civic_leaderboard.services.fallback_service import FallbackSynthesizer
from civic_leaderboard.services.leaderboard_service import LeaderboardService
from civic_leaderboard.services.stats_service import StatsService

# Bearer token is optional: anonymous visitors can see the leaderboard too
optional_security = HTTPBearer(auto_error=False)


async def get_optional_user_id(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(optional_security)],
) -> Optional[str]:
    """
    Current user id from the bearer token, or None.

    Missing, invalid or expired tokens just mean "anonymous".
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        return None

    return payload.get("sub")


def get_leaderboard_service(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LeaderboardService:
    rng = random.Random(settings.fallback_seed) if settings.fallback_seed is not None else None
    return LeaderboardService(
        source=LeaderboardRepository(db),
        directory=UserRepository(db),
        synthesizer=FallbackSynthesizer(rng=rng, size=settings.fallback_size),
        tz=settings.streak_tz,
    )


def get_stats_service(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> StatsService:
    return StatsService(UserRepository(db), tz=settings.streak_tz)


def get_description_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> DescriptionService:
    return DescriptionService(settings)


# Type aliases so the endpoints read cleaner
CurrentUserId = Annotated[Optional[str], Depends(get_optional_user_id)]
LeaderboardServiceDep = Annotated[LeaderboardService, Depends(get_leaderboard_service)]
StatsServiceDep = Annotated[StatsService, Depends(get_stats_service)]
DescriptionServiceDep = Annotated[DescriptionService, Depends(get_description_service)]
