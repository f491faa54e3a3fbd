# app/services/ranking_service.py
"""
Leaderboards over stored summaries
"""

from datetime import datetime, timedelta, tzinfo
from typing import Dict, List, Optional

from app.exceptions import ValidationError
from app.models import SubmissionSummary
from app.services.database_service import database_service
from app.utils.logger import logger
from app.utils.timeutils import Clock, get_tracking_timezone, local_date

RANKING_PERIODS = ("today", "this_week", "this_month", "total")


def resolve_period(period: Optional[str], now: datetime, tz: tzinfo):
    """SQL filter on SUMMARY_DATE for a ranking period, or None for "total".

    "today" deliberately spans today and yesterday: the tracking job stamps
    rows with the day it ran on, not the day the problems were solved.
    """
    if period not in RANKING_PERIODS:
        raise ValidationError(f"Invalid ranking type: {period!r}. Use one of {', '.join(RANKING_PERIODS)}")

    today = local_date(now, tz)
    column = SubmissionSummary.SUMMARY_DATE

    if period == "today":
        yesterday = today - timedelta(days=1)
        return column.in_([today.isoformat(), yesterday.isoformat()])
    if period == "this_week":
        return column >= (today - timedelta(days=6)).isoformat()
    if period == "this_month":
        return column >= today.replace(day=1).isoformat()
    return None


class RankingService:
    def __init__(self, db=None, clock: Optional[Clock] = None, tz=None):
        self.db = db or database_service
        self.clock = clock or Clock()
        self.tz = tz or get_tracking_timezone()

    async def get_ranking(self, period: Optional[str]) -> List[Dict]:
        date_filter = resolve_period(period, self.clock.now(), self.tz)
        ranking = await self.db.aggregate_summaries(date_filter)
        logger.info(f" Ranking {period}: {len(ranking)} users")
        return ranking

    async def get_total_leaderboard(self) -> List[Dict]:
        return await self.db.get_total_leaderboard()

    async def get_contest_leaderboard(self) -> List[Dict]:
        return await self.db.get_contest_leaderboard()


ranking_service = RankingService()
