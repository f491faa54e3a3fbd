# app/utils/timeutils.py
"""
Clock and timezone helpers.

All tracking and ranking code asks a Clock for "now" instead of calling
datetime.now() directly, so tests can pin the instant. Calendar labels are
always rendered in the configured tracking timezone (IST by default).
"""

from datetime import datetime, date, timezone, timedelta, tzinfo
from typing import Optional, Tuple

from app.config import settings


def get_tracking_timezone(offset_minutes: Optional[int] = None, name: Optional[str] = None) -> tzinfo:
    """Fixed-offset timezone used for date labels (UTC+05:30 unless configured)."""
    if offset_minutes is None:
        offset_minutes = settings.timezone_offset_minutes
    if name is None:
        name = settings.timezone_name
    return timezone(timedelta(minutes=offset_minutes), name)


class Clock:
    """Wall clock, always timezone-aware UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock frozen at a given instant (naive values are taken as UTC)."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def local_date(now: datetime, tz: tzinfo) -> date:
    return now.astimezone(tz).date()


def date_label(now: datetime, tz: tzinfo) -> str:
    """YYYY-MM-DD of `now` in `tz`."""
    return local_date(now, tz).isoformat()


def rolling_window(now: datetime, hours: int) -> Tuple[datetime, datetime]:
    """[now - hours, now) in absolute time, not aligned to any calendar day."""
    return now - timedelta(hours=hours), now


def to_epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)
