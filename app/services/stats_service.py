# app/services/stats_service.py
"""
Lifetime stats: total solved counts and contest ranking, mirrored from LeetCode
"""

from typing import Dict, Iterable, Optional

from app.exceptions import NotFoundError
from app.schemas.commons_schemas import DifficultyBreakdown
from app.schemas.leetcode_schemas import DifficultyCount
from app.services.database_service import database_service
from app.services.leetcode_client import leetcode_client
from app.utils.logger import logger
from app.utils.timeutils import Clock


def extract_difficulty_counts(accepted_counts: Optional[Iterable[DifficultyCount]]) -> DifficultyBreakdown:
    """Easy/medium/hard from acSubmissionNum; the "All" bucket is ignored."""
    counts = DifficultyBreakdown()
    for item in accepted_counts or []:
        level = (item.difficulty or "").lower()
        if level in ("easy", "medium", "hard"):
            setattr(counts, level, item.count)
    return counts


class StatsService:
    def __init__(self, client=None, db=None, clock: Optional[Clock] = None):
        self.client = client or leetcode_client
        self.db = db or database_service
        self.clock = clock or Clock()

    async def get_live_counts(self, username: str) -> Dict:
        profile = await self.client.fetch_user_profile(username)
        if not profile.matched_user:
            raise NotFoundError("Username not found on LeetCode")
        counts = extract_difficulty_counts(profile.accepted_counts)
        return {
            "username": username,
            "easy": counts.easy,
            "medium": counts.medium,
            "hard": counts.hard,
            "totalSolved": counts.total,
        }

    async def refresh_total_stats(self) -> Dict:
        refreshed_at = self.clock.now()
        users = await self.db.list_users()
        logger.info(f" Refreshing total stats for {len(users)} users")

        results = []
        for user in users:
            try:
                live = await self.get_live_counts(user.USERNAME)
                await self.db.upsert_total_stats(
                    user_id=user.USER_ID,
                    easy=live["easy"],
                    medium=live["medium"],
                    hard=live["hard"],
                    refreshed_at=refreshed_at,
                )
                results.append({
                    "user": user.USERNAME,
                    "easy": live["easy"],
                    "medium": live["medium"],
                    "hard": live["hard"],
                    "totalSolved": live["totalSolved"],
                })
            except Exception as e:
                logger.error(f" Total stats refresh failed for {user.USERNAME}: {e}")
                results.append({"user": user.USERNAME, "error": True})

        return {
            "status": "Total stats refreshed",
            "refreshedAt": refreshed_at.isoformat(),
            "results": results,
        }

    async def refresh_contest_rankings(self) -> Dict:
        refreshed_at = self.clock.now()
        users = await self.db.list_users()
        logger.info(f" Refreshing contest rankings for {len(users)} users")

        results = []
        for user in users:
            try:
                ranking = await self.client.fetch_contest_ranking(user.USERNAME)
                if ranking is None:
                    # never entered a contest
                    results.append({"user": user.USERNAME, "skipped": True})
                    continue
                await self.db.upsert_contest_ranking(user.USER_ID, ranking.model_dump())
                results.append({
                    "user": user.USERNAME,
                    "rating": ranking.rating,
                    "attendedContestsCount": ranking.attendedContestsCount,
                })
            except Exception as e:
                logger.error(f" Contest ranking refresh failed for {user.USERNAME}: {e}")
                results.append({"user": user.USERNAME, "error": True})

        return {
            "status": "Contest rankings refreshed",
            "refreshedAt": refreshed_at.isoformat(),
            "results": results,
        }

    async def refresh_all(self) -> None:
        """Scheduled refresh of both lifetime tables."""
        try:
            await self.refresh_total_stats()
            await self.refresh_contest_rankings()
        except Exception as e:
            logger.error(f" Scheduled stats refresh failed: {e}")


stats_service = StatsService()
