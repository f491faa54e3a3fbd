# tests/conftest.py
# Shared fixtures: in-memory SQLite per test, a fake LeetCode client and a frozen clock.

import asyncio
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from app.exceptions import NotFoundError, UpstreamError
from app.models import build_engine, build_session_factory
from app.schemas.leetcode_schemas import ContestRankingInfo, DifficultyCount, ExternalSubmission, UserProfile
from app.services.database_service import database_service
from app.services.ranking_service import ranking_service
from app.services.registration_service import registration_service
from app.services.stats_service import stats_service
from app.services.tracking_service import tracking_service
from app.utils.timeutils import FixedClock

# 2024-06-15 12:00 UTC == 17:30 IST, same calendar day
NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
NOW_S = int(NOW.timestamp())
DAY_S = 24 * 60 * 60


def submission(slug: Optional[str], ts: Optional[int], status: str = "Accepted", difficulty: Optional[str] = None) -> ExternalSubmission:
    return ExternalSubmission(
        titleSlug=slug,
        title=slug.replace("-", " ").title() if slug else None,
        statusDisplay=status,
        timestamp=ts,
        difficulty=difficulty,
    )


class FakeLeetCodeClient:
    """Stands in for LeetCodeClient; profiles and difficulties are set per test."""

    def __init__(self):
        self.profiles: Dict[str, UserProfile] = {}
        self.difficulties: Dict[str, str] = {}
        self.contests: Dict[str, Optional[ContestRankingInfo]] = {}
        self.failing_users = set()
        self.profile_calls: List[str] = []
        self.difficulty_calls: List[str] = []

    def add_user(
        self,
        username: str,
        submissions: Optional[Iterable[ExternalSubmission]] = (),
        counts: Optional[Dict[str, int]] = None,
        matched: bool = True,
    ):
        self.profiles[username] = UserProfile(
            username=username,
            matched_user=matched,
            recent_submissions=list(submissions) if submissions is not None else None,
            accepted_counts=[DifficultyCount(difficulty=d, count=c) for d, c in (counts or {}).items()],
        )

    async def fetch_user_profile(self, username: str) -> UserProfile:
        self.profile_calls.append(username)
        if username in self.failing_users:
            raise UpstreamError(f"LeetCode HTTP 503 for {username}")
        if username not in self.profiles:
            raise NotFoundError(f"Username not found on LeetCode: {username}")
        return self.profiles[username]

    async def fetch_problem_difficulty(self, slug: str) -> str:
        self.difficulty_calls.append(slug)
        if slug not in self.difficulties:
            raise UpstreamError(f"No difficulty for problem {slug}")
        return self.difficulties[slug]

    async def fetch_contest_ranking(self, username: str) -> Optional[ContestRankingInfo]:
        if username in self.failing_users:
            raise UpstreamError(f"LeetCode HTTP 503 for {username}")
        return self.contests.get(username)


@pytest.fixture
async def db(monkeypatch):
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    monkeypatch.setattr(database_service, "engine", engine)
    monkeypatch.setattr(database_service, "async_session", build_session_factory(engine))
    monkeypatch.setattr(database_service, "_sqlite_lock", asyncio.Lock())
    await database_service.create_tables()
    yield database_service
    await engine.dispose()


@pytest.fixture
def fake_client(monkeypatch):
    fake = FakeLeetCodeClient()
    for service in (tracking_service, registration_service, stats_service):
        monkeypatch.setattr(service, "client", fake)
    return fake


@pytest.fixture
def clock(monkeypatch):
    fixed = FixedClock(NOW)
    for service in (tracking_service, ranking_service, stats_service):
        monkeypatch.setattr(service, "clock", fixed)
    return fixed


@pytest.fixture
async def client(db, fake_client, clock):
    from app.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
