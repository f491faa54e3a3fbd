# app/services/tracking_service.py
"""
Daily tracking job

For every tracked user: pull recent submissions, keep the accepted ones from
the trailing window, dedupe by problem, classify by difficulty and upsert one
summary row keyed by today's date in the tracking timezone.

The counting window is rolling ([now - 24h, now)) while the storage key is the
calendar day of `now`; the "today" ranking reads two days to cover the gap.
"""

import asyncio
from typing import Dict, Iterable, List, NamedTuple, Optional

from app.config import settings
from app.models import TrackedUser
from app.schemas.commons_schemas import DifficultyBreakdown
from app.schemas.leetcode_schemas import ExternalSubmission
from app.services.database_service import database_service
from app.services.leetcode_client import leetcode_client
from app.utils.logger import logger
from app.utils.timeutils import Clock, date_label, get_tracking_timezone, rolling_window, to_epoch_ms

ACCEPTED = "Accepted"
UNKNOWN_DIFFICULTY = "Unknown"


class TrackingWindow(NamedTuple):
    start_ms: int
    end_ms: int
    date_key: str
    start_iso: str
    end_iso: str


def select_accepted(submissions: Iterable[ExternalSubmission], start_ms: int, end_ms: int) -> List[ExternalSubmission]:
    """Accepted submissions inside [start_ms, end_ms), first one per slug, original order."""
    seen = set()
    selected = []
    for sub in submissions:
        if sub.statusDisplay != ACCEPTED:
            continue
        if sub.timestamp is None:
            continue
        ts = sub.timestamp * 1000
        if not (start_ms <= ts < end_ms):
            continue
        if not sub.titleSlug or sub.titleSlug in seen:
            continue
        seen.add(sub.titleSlug)
        selected.append(sub)
    return selected


class TrackingService:
    def __init__(
        self,
        client=None,
        db=None,
        clock: Optional[Clock] = None,
        tz=None,
        window_hours: Optional[int] = None,
        concurrency: Optional[int] = None,
    ):
        self.client = client or leetcode_client
        self.db = db or database_service
        self.clock = clock or Clock()
        self.tz = tz or get_tracking_timezone()
        self.window_hours = window_hours or settings.track_window_hours
        self.concurrency = max(1, concurrency or settings.track_concurrency)
        logger.info(" TrackingService ready")

    def current_window(self) -> TrackingWindow:
        now = self.clock.now()
        start, end = rolling_window(now, self.window_hours)
        return TrackingWindow(
            start_ms=to_epoch_ms(start),
            end_ms=to_epoch_ms(end),
            date_key=date_label(now, self.tz),
            start_iso=start.isoformat(),
            end_iso=end.isoformat(),
        )

    async def resolve_difficulty(self, submission: ExternalSubmission) -> str:
        if submission.difficulty:
            return submission.difficulty
        try:
            return await self.client.fetch_problem_difficulty(submission.titleSlug)
        except Exception as e:
            logger.warning(f" Difficulty lookup failed for {submission.titleSlug}: {e}")
            return UNKNOWN_DIFFICULTY

    async def count_by_difficulty(self, submissions: Iterable[ExternalSubmission]) -> DifficultyBreakdown:
        counts = DifficultyBreakdown()
        for sub in submissions:
            level = (await self.resolve_difficulty(sub)).lower()
            if level == "easy":
                counts.easy += 1
            elif level == "medium":
                counts.medium += 1
            elif level == "hard":
                counts.hard += 1
        return counts

    async def track_user(self, user: TrackedUser, window: TrackingWindow) -> Dict:
        try:
            profile = await self.client.fetch_user_profile(user.USERNAME)
            submissions = profile.recent_submissions or []

            accepted = select_accepted(submissions, window.start_ms, window.end_ms)
            counts = await self.count_by_difficulty(accepted)
            total = counts.total

            # only write when something was solved
            if total > 0:
                await self.db.upsert_submission_summary(
                    user_id=user.USER_ID,
                    summary_date=window.date_key,
                    easy=counts.easy,
                    medium=counts.medium,
                    hard=counts.hard,
                )

            logger.info(f" Tracked {user.USERNAME}: {total} solved ({counts.easy}/{counts.medium}/{counts.hard})")
            return {
                "user": user.USERNAME,
                "totalCount": total,
                "easy": counts.easy,
                "medium": counts.medium,
                "hard": counts.hard,
            }
        except Exception as e:
            logger.error(f" Tracking failed for {user.USERNAME}: {e}")
            return {"user": user.USERNAME, "error": True}

    async def track_all(self) -> Dict:
        """Run one tracking pass over every user and return the report."""
        window = self.current_window()
        users = await self.db.list_users()
        logger.info(f" Tracking {len(users)} users for {window.date_key} (concurrency={self.concurrency})")

        semaphore = asyncio.Semaphore(self.concurrency)

        async def guarded(user: TrackedUser) -> Dict:
            async with semaphore:
                return await self.track_user(user, window)

        results = await asyncio.gather(*(guarded(user) for user in users))

        failed = sum(1 for r in results if r.get("error"))
        logger.info(f" Tracking finished: {len(results) - failed} ok, {failed} failed")
        return {
            "status": "Daily summary updated",
            "windowStart": window.start_iso,
            "windowEnd": window.end_iso,
            "dateKey": window.date_key,
            "results": list(results),
        }

    async def run_in_background(self) -> None:
        """Fire-and-forget entry point; the report is only logged."""
        try:
            await self.track_all()
        except Exception as e:
            logger.error(f" Background tracking failed: {e}")


tracking_service = TrackingService()
