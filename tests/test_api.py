# tests/test_api.py
# Route-level tests through httpx + ASGITransport (startup hooks are not run;
# the db fixture creates the tables).

import pytest

from conftest import NOW_S, submission


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_create_and_list_users(client, fake_client):
    fake_client.add_user("alice", [])

    resp = await client.post("/users", json={"username": "alice", "name": "Alice"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "User added successfully"
    assert body["user"]["username"] == "alice"
    assert body["user"]["name"] == "Alice"

    resp = await client.get("/users")
    assert resp.status_code == 200
    assert [u["username"] for u in resp.json()] == ["alice"]


@pytest.mark.asyncio
async def test_create_user_errors(client, fake_client):
    fake_client.add_user("alice", [])
    fake_client.add_user("ghost", [], matched=False)

    resp = await client.post("/users", json={})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Username is required"

    assert (await client.post("/users", json={"username": "alice"})).status_code == 201
    resp = await client.post("/users", json={"username": "alice"})
    assert resp.status_code == 400

    resp = await client.post("/users", json={"username": "ghost"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Username not found on LeetCode"


@pytest.mark.asyncio
async def test_create_user_unexpected_failure(client, fake_client):
    fake_client.failing_users.add("flaky")
    resp = await client.post("/users", json={"username": "flaky"})
    assert resp.status_code == 500


@pytest.mark.asyncio
async def test_track_returns_report(client, db, fake_client):
    await db.create_user("alice")
    await db.create_user("broken")
    fake_client.add_user("alice", [submission("two-sum", NOW_S - 60, difficulty="Easy")])
    fake_client.failing_users.add("broken")

    resp = await client.get("/track")

    assert resp.status_code == 200
    body = resp.json()
    assert body["dateKey"] == "2024-06-15"
    assert set(body) >= {"windowStart", "windowEnd", "dateKey", "results"}
    by_user = {r["user"]: r for r in body["results"]}
    assert by_user["alice"] == {"user": "alice", "totalCount": 1, "easy": 1, "medium": 0, "hard": 0}
    assert by_user["broken"] == {"user": "broken", "error": True}


@pytest.mark.asyncio
async def test_track_top_level_failure(client, monkeypatch):
    from app.services.database_service import database_service

    async def unreachable():
        raise RuntimeError("database unreachable")

    monkeypatch.setattr(database_service, "list_users", unreachable)
    resp = await client.get("/track")
    assert resp.status_code == 500


@pytest.mark.asyncio
async def test_background_track_acknowledges_and_runs(client, db, fake_client):
    await db.create_user("alice")
    fake_client.add_user("alice", [submission("two-sum", NOW_S - 60, difficulty="Hard")])

    resp = await client.get("/background-track")

    assert resp.status_code == 202
    assert resp.json() == {"message": "Processing started"}
    summaries = await db.get_summaries()
    assert [(s.SUMMARY_DATE, s.HARD_COUNT) for s in summaries] == [("2024-06-15", 1)]


@pytest.mark.asyncio
async def test_ranking(client, db):
    user = await db.create_user("alice")
    await db.upsert_submission_summary(user.USER_ID, "2024-06-15", 1, 1, 0)

    resp = await client.get("/ranking", params={"type": "today"})
    assert resp.status_code == 200
    assert resp.json() == [{"username": "alice", "name": None, "totalCount": 2, "easy": 1, "medium": 1, "hard": 0}]


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["?type=foo", ""])
async def test_ranking_rejects_invalid_type(client, query):
    resp = await client.get(f"/ranking{query}")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_refresh_total_and_leaderboard(client, db, fake_client):
    await db.create_user("alice")
    await db.create_user("bob")
    fake_client.add_user("alice", [], counts={"Easy": 1, "Medium": 1})
    fake_client.add_user("bob", [], counts={"Easy": 10, "Hard": 3})

    resp = await client.get("/refresh-total")
    assert resp.status_code == 200
    assert len(resp.json()["results"]) == 2

    resp = await client.get("/total-leaderboard")
    assert resp.status_code == 200
    assert [(r["username"], r["totalSolved"]) for r in resp.json()] == [("bob", 13), ("alice", 2)]


@pytest.mark.asyncio
async def test_contest_leaderboard_empty(client, db, fake_client):
    await db.create_user("alice")

    resp = await client.get("/refresh-contest")
    assert resp.status_code == 200
    assert resp.json()["results"] == [{"user": "alice", "skipped": True}]

    resp = await client.get("/contest-leaderboard")
    assert resp.json() == []


@pytest.mark.asyncio
async def test_live_passthrough(client, db, fake_client):
    fake_client.add_user("alice", [], counts={"All": 4, "Easy": 2, "Medium": 1, "Hard": 1})
    fake_client.failing_users.add("flaky")

    resp = await client.get("/leetcode/alice")
    assert resp.status_code == 200
    assert resp.json() == {"username": "alice", "easy": 2, "medium": 1, "hard": 1, "totalSolved": 4}
    assert await db.list_users() == []

    assert (await client.get("/leetcode/nobody")).status_code == 404
    assert (await client.get("/leetcode/flaky")).status_code == 502


@pytest.mark.asyncio
async def test_create_user_tolerates_malformed_recent_submission(client, monkeypatch):
    from app.services.leetcode_client import LeetCodeClient
    from app.services.registration_service import registration_service

    real_client = LeetCodeClient(graphql_url="https://example.com/graphql")

    async def mock_post(query, variables):
        return {
            "data": {
                "matchedUser": {"username": variables["username"], "submitStats": {"acSubmissionNum": []}},
                "recentSubmissionList": [
                    {"title": "Two Sum", "titleSlug": "two-sum", "timestamp": None, "statusDisplay": "Accepted"},
                ],
            }
        }

    monkeypatch.setattr(real_client, "_post_graphql", mock_post)
    monkeypatch.setattr(registration_service, "client", real_client)

    resp = await client.post("/users", json={"username": "bob"})
    assert resp.status_code == 201
    assert resp.json()["user"]["username"] == "bob"
