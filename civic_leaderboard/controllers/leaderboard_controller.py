"""
Leaderboard controller - ranking, per-user stats and achievements

The leaderboard is computed from the live report data on every request.
When that data is unavailable the response still has entries, flagged
with is_fallback=True.
"""

from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from civic_leaderboard.core.config import get_settings
from civic_leaderboard.core.dependencies import CurrentUserId, LeaderboardServiceDep, StatsServiceDep
from civic_leaderboard.models.achievement import AchievementDefinition
from civic_leaderboard.models.leaderboard import LeaderboardEntry
from civic_leaderboard.models.stats import UserStats
from civic_leaderboard.services.achievement_service import fetch_achievement_definitions
from civic_leaderboard.services.stats_service import NotCitizenError, UserNotFoundError


router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])

settings = get_settings()


class LeaderboardResponse(BaseModel):
    """Leaderboard entries plus the caller's position (when known)."""
    leaderboard: list[LeaderboardEntry]
    user_rank: Optional[int] = None
    current_user: Optional[LeaderboardEntry] = None
    timeframe: str
    total_users: int
    is_fallback: bool


class AchievementsResponse(BaseModel):
    achievements: list[AchievementDefinition]


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    service: LeaderboardServiceDep,
    user_id: CurrentUserId,
    timeframe: Literal["all", "week", "month", "year"] = Query("all", description="Report window"),
    limit: int = Query(settings.leaderboard_default_limit, ge=1, le=settings.leaderboard_max_limit),
):
    """
    Get the citizen leaderboard.

    Sends the caller's rank too when a valid bearer token is present.
    """
    result = await service.get_leaderboard(timeframe, limit, current_user_id=user_id)

    return LeaderboardResponse(
        leaderboard=result.entries,
        user_rank=result.current_user_rank,
        current_user=result.current_user,
        timeframe=result.timeframe,
        total_users=result.total_users,
        is_fallback=result.is_fallback,
    )


@router.get("/stats/{user_id}", response_model=UserStats)
async def get_user_stats(user_id: str, service: StatsServiceDep):
    """
    Get the statistics of one citizen.
    """
    try:
        return await service.get_user_stats(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotCitizenError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/achievements", response_model=AchievementsResponse)
async def get_achievements():
    """
    List the achievements users can unlock.
    """
    return AchievementsResponse(achievements=await fetch_achievement_definitions())
