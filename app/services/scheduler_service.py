from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from app.config import settings
from app.services.stats_service import stats_service
from app.services.tracking_service import tracking_service
from app.utils.logger import logger
from app.utils.timeutils import get_tracking_timezone

class SchedulerService:
    def __init__(self):
        self.scheduler = AsyncIOScheduler(timezone=get_tracking_timezone())
        logger.info(" SchedulerService ready")

    def start(self):
        try:
            tz = get_tracking_timezone()
            self.scheduler.add_job(
                func=tracking_service.run_in_background,
                trigger=CronTrigger(hour=settings.track_cron_hour, minute=settings.track_cron_minute, timezone=tz),
                id='daily_track',
                replace_existing=True,
            )
            self.scheduler.add_job(
                func=stats_service.refresh_all,
                trigger=CronTrigger(hour=settings.refresh_cron_hour, minute=settings.refresh_cron_minute, timezone=tz),
                id='total_refresh',
                replace_existing=True,
            )
            self.scheduler.start()
            logger.info(
                f" Scheduler started - tracking at {settings.track_cron_hour:02d}:{settings.track_cron_minute:02d}, "
                f"refresh at {settings.refresh_cron_hour:02d}:{settings.refresh_cron_minute:02d} ({tz})"
            )
        except Exception as e:
            logger.error(f" Scheduler start failed: {e}")

    def stop(self):
        if not self.scheduler.running:
            return
        try:
            self.scheduler.shutdown(wait=False)
            logger.info(" Scheduler stopped")
        except Exception as e:
            logger.error(f" Scheduler stop failed: {e}")

    def job_ids(self):
        return sorted(job.id for job in self.scheduler.get_jobs())

scheduler_service = SchedulerService()
