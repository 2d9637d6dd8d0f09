"""
LeaderboardService - fetches leaderboard data and never leaves the caller empty-handed.

1. Ask the leaderboard source for a snapshot and rank it
2. If the source fails or returns nothing, build fallback data from the
   user directory
3. If the directory also fails (or has no citizens), use sample data

Every fallback result carries is_fallback=True so the UI can say so.
"""

import logging
from datetime import timezone, tzinfo
from typing import Optional, Protocol

from civic_leaderboard.models.leaderboard import (
    LeaderboardEntry,
    LeaderboardResult,
    LeaderboardSnapshot,
)
from civic_leaderboard.models.user import UserScoringInput
from civic_leaderboard.services.fallback_service import FallbackSynthesizer
from civic_leaderboard.services.ranking_service import build_leaderboard

logger = logging.getLogger(__name__)


class LeaderboardSource(Protocol):
    async def fetch_leaderboard(self, timeframe: str, limit: int) -> LeaderboardSnapshot:
        ...


class UserDirectory(Protocol):
    async def fetch_all_users(self) -> list[UserScoringInput]:
        ...


class LeaderboardService:
    def __init__(
        self,
        source: LeaderboardSource,
        directory: Optional[UserDirectory] = None,
        synthesizer: Optional[FallbackSynthesizer] = None,
        tz: tzinfo = timezone.utc,
        messages: Optional[dict[str, str]] = None,
    ):
        self.source = source
        self.directory = directory
        self.synthesizer = synthesizer or FallbackSynthesizer()
        self.tz = tz
        self.messages = messages

    async def get_leaderboard(
        self,
        timeframe: str = "all",
        limit: int = 100,
        current_user_id: Optional[str] = None,
    ) -> LeaderboardResult:
        """
        Ranked leaderboard for a timeframe.

        Does not raise when the source or the directory fail: the result is
        then fallback data with is_fallback=True.
        """
        try:
            snapshot = await self.source.fetch_leaderboard(timeframe, limit)
        except Exception:
            logger.warning("Leaderboard source unavailable, using fallback data", exc_info=True)
            return await self._fallback(timeframe, limit, current_user_id)

        if not snapshot.entries:
            logger.warning("Leaderboard source returned no entries for timeframe=%s, using fallback data", timeframe)
            return await self._fallback(timeframe, limit, current_user_id)

        ranked = build_leaderboard(
            snapshot.entries,
            limit,
            current_user_id=current_user_id,
            current_user_rank=snapshot.current_user_rank,
            tz=self.tz,
            messages=self.messages,
        )
        logger.debug("Built leaderboard with %d of %d users", len(ranked.entries), len(snapshot.entries))

        return LeaderboardResult(
            entries=ranked.entries,
            current_user_rank=ranked.current_user_rank,
            current_user=ranked.current_user,
            total_users=snapshot.total_users or len(snapshot.entries),
            timeframe=timeframe,
            is_fallback=False,
        )

    async def _directory_entries(self) -> Optional[list[LeaderboardEntry]]:
        if self.directory is None:
            return None

        try:
            users = await self.directory.fetch_all_users()
            return self.synthesizer.from_directory(users)
        except Exception:
            logger.warning("User directory unavailable, generating sample leaderboard", exc_info=True)
            return None

    async def _fallback(
        self,
        timeframe: str,
        limit: int,
        current_user_id: Optional[str],
    ) -> LeaderboardResult:
        entries = await self._directory_entries()
        if entries is None:
            entries = self.synthesizer.synthesize()
            logger.info("Generated %d sample leaderboard entries", len(entries))
        else:
            logger.info("Built fallback leaderboard from %d directory users", len(entries))

        current_user = next(
            (entry for entry in entries if entry.user_id == current_user_id),
            None,
        ) if current_user_id is not None else None

        return LeaderboardResult(
            entries=entries[: max(limit, 0)],
            current_user_rank=current_user.rank if current_user else None,
            current_user=current_user,
            total_users=len(entries),
            timeframe=timeframe,
            is_fallback=True,
        )
