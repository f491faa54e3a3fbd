# tests/test_stats_service.py

import pytest

from app.exceptions import NotFoundError
from app.schemas.leetcode_schemas import ContestRankingInfo, DifficultyCount
from app.services.stats_service import extract_difficulty_counts, stats_service

from conftest import NOW


def test_extract_difficulty_counts_ignores_all_bucket_and_case():
    counts = extract_difficulty_counts([
        DifficultyCount(difficulty="All", count=99),
        DifficultyCount(difficulty="EASY", count=5),
        DifficultyCount(difficulty="medium", count=3),
    ])
    assert (counts.easy, counts.medium, counts.hard, counts.total) == (5, 3, 0, 8)


def test_extract_difficulty_counts_handles_missing_list():
    assert extract_difficulty_counts(None).total == 0


@pytest.mark.asyncio
async def test_live_counts(fake_client):
    fake_client.add_user("alice", [], counts={"All": 10, "Easy": 5, "Medium": 3, "Hard": 2})
    assert await stats_service.get_live_counts("alice") == {
        "username": "alice", "easy": 5, "medium": 3, "hard": 2, "totalSolved": 10,
    }


@pytest.mark.asyncio
async def test_live_counts_unmatched_user(fake_client):
    fake_client.add_user("ghost", [], matched=False)
    with pytest.raises(NotFoundError):
        await stats_service.get_live_counts("ghost")


@pytest.mark.asyncio
async def test_refresh_total_overwrites_and_continues_past_failures(db, fake_client, clock):
    await db.create_user("alice")
    await db.create_user("bob")
    await db.create_user("broken")
    fake_client.add_user("alice", [], counts={"Easy": 5, "Medium": 3, "Hard": 2})
    fake_client.add_user("bob", [], counts={"Easy": 1})
    fake_client.failing_users.add("broken")

    report = await stats_service.refresh_total_stats()

    assert report["refreshedAt"] == NOW.isoformat()
    by_user = {r["user"]: r for r in report["results"]}
    assert by_user["alice"]["totalSolved"] == 10
    assert by_user["bob"] == {"user": "bob", "easy": 1, "medium": 0, "hard": 0, "totalSolved": 1}
    assert by_user["broken"] == {"user": "broken", "error": True}

    # lifetime counters are mirrored, not accumulated
    fake_client.add_user("alice", [], counts={"Easy": 6, "Medium": 3, "Hard": 2})
    await stats_service.refresh_total_stats()

    leaderboard = await db.get_total_leaderboard()
    assert [(r["username"], r["totalSolved"]) for r in leaderboard] == [("alice", 11), ("bob", 1)]


@pytest.mark.asyncio
async def test_refresh_contest_rankings(db, fake_client, clock):
    await db.create_user("alice")
    await db.create_user("bob")
    await db.create_user("newbie")
    fake_client.contests["alice"] = ContestRankingInfo(
        attendedContestsCount=12, rating=1850.5, globalRanking=40000,
        totalParticipants=600000, topPercentage=7.1, badge="Knight",
    )
    fake_client.contests["bob"] = ContestRankingInfo(
        attendedContestsCount=3, rating=1500.0, globalRanking=300000,
        totalParticipants=600000, topPercentage=50.0,
    )

    report = await stats_service.refresh_contest_rankings()

    by_user = {r["user"]: r for r in report["results"]}
    assert by_user["newbie"] == {"user": "newbie", "skipped": True}
    assert by_user["alice"]["rating"] == 1850.5

    fake_client.contests["bob"] = ContestRankingInfo(
        attendedContestsCount=4, rating=1900.0, globalRanking=30000,
        totalParticipants=600000, topPercentage=5.0, badge="Knight",
    )
    await stats_service.refresh_contest_rankings()

    leaderboard = await db.get_contest_leaderboard()
    assert [(r["username"], r["rating"], r["attendedContestsCount"]) for r in leaderboard] == [
        ("bob", 1900.0, 4),
        ("alice", 1850.5, 12),
    ]
    assert leaderboard[0]["badge"] == "Knight"
