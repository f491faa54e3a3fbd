# app/services/leetcode_client.py
"""
LeetCode GraphQL client

Thin async wrapper over the public GraphQL endpoint. Every call opens its own
aiohttp session; the tracker makes few calls and runs them sequentially by
default, so there is no shared connection pool to manage.
"""

import asyncio
from typing import Any, Dict, List, Optional

import aiohttp
from pydantic import ValidationError as SchemaValidationError

from app.config import settings
from app.exceptions import NotFoundError, UpstreamError
from app.schemas.leetcode_schemas import (
    ContestRankingInfo,
    DifficultyCount,
    ExternalSubmission,
    UserProfile,
)
from app.utils.logger import logger

REQUEST_HEADERS = {
    "Content-Type": "application/json",
    "Origin": "https://leetcode.com",
    "Referer": "https://leetcode.com/",
    "User-Agent": "Mozilla/5.0",
}

USER_PROFILE_QUERY = """
query userProfile($username: String!, $limit: Int!) {
    matchedUser(username: $username) {
        username
        submitStats: submitStatsGlobal {
            acSubmissionNum { difficulty count }
        }
    }
    recentSubmissionList(username: $username, limit: $limit) {
        title
        titleSlug
        timestamp
        statusDisplay
        lang
    }
}
"""

QUESTION_DIFFICULTY_QUERY = """
query questionData($titleSlug: String!) {
    question(titleSlug: $titleSlug) { questionId titleSlug difficulty }
}
"""

CONTEST_RANKING_QUERY = """
query userContestRanking($username: String!) {
    userContestRanking(username: $username) {
        attendedContestsCount
        rating
        globalRanking
        totalParticipants
        topPercentage
        badge { name }
    }
}
"""


def _error_messages(payload: Dict[str, Any]) -> List[str]:
    return [str(err.get("message", "")) for err in payload.get("errors") or [] if isinstance(err, dict)]


def parse_user_profile(username: str, payload: Dict[str, Any]) -> UserProfile:
    """Turn a raw userProfile response into a UserProfile.

    A GraphQL "user does not exist" error becomes NotFoundError; any other
    GraphQL error without usable data becomes UpstreamError.
    """
    data = payload.get("data") or {}
    errors = _error_messages(payload)
    matched = data.get("matchedUser")

    if matched is None and any("not exist" in msg.lower() for msg in errors):
        raise NotFoundError(f"Username not found on LeetCode: {username}")
    if errors and not data:
        raise UpstreamError(f"LeetCode GraphQL error for {username}: {'; '.join(errors)}")

    recent = data.get("recentSubmissionList")
    recent_submissions = None
    if isinstance(recent, list):
        recent_submissions = []
        for item in recent:
            try:
                recent_submissions.append(ExternalSubmission.model_validate(item))
            except SchemaValidationError as e:
                logger.warning(f" Skipping malformed submission for {username}: {e.error_count()} error(s)")

    accepted_counts = None
    if isinstance(matched, dict):
        stats = (matched.get("submitStats") or {}).get("acSubmissionNum")
        if isinstance(stats, list):
            accepted_counts = [DifficultyCount.model_validate(item) for item in stats]

    return UserProfile(
        username=username,
        matched_user=matched is not None,
        recent_submissions=recent_submissions,
        accepted_counts=accepted_counts,
    )


def parse_contest_ranking(payload: Dict[str, Any]) -> Optional[ContestRankingInfo]:
    data = payload.get("data") or {}
    errors = _error_messages(payload)
    if errors and not data:
        raise UpstreamError(f"LeetCode GraphQL error: {'; '.join(errors)}")

    ranking = data.get("userContestRanking")
    if not ranking:
        return None
    badge = ranking.get("badge") or {}
    return ContestRankingInfo(
        attendedContestsCount=ranking.get("attendedContestsCount") or 0,
        rating=ranking.get("rating") or 0,
        globalRanking=ranking.get("globalRanking") or 0,
        totalParticipants=ranking.get("totalParticipants") or 1,
        topPercentage=ranking.get("topPercentage") if ranking.get("topPercentage") is not None else 100,
        badge=badge.get("name"),
    )


class LeetCodeClient:
    def __init__(self, graphql_url: Optional[str] = None, timeout: Optional[float] = None):
        self.graphql_url = graphql_url or settings.leetcode_graphql_url
        self.timeout = timeout if timeout is not None else settings.leetcode_request_timeout
        self.recent_limit = settings.recent_submission_limit

    async def _post_graphql(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    self.graphql_url,
                    headers=REQUEST_HEADERS,
                    json={"query": query, "variables": variables},
                ) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise UpstreamError(f"LeetCode HTTP {response.status}: {error_text[:200]}")
                    return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f" LeetCode request failed: {e}")
            raise UpstreamError(f"LeetCode request failed: {e}") from e

    async def fetch_user_profile(self, username: str) -> UserProfile:
        payload = await self._post_graphql(
            USER_PROFILE_QUERY,
            {"username": username, "limit": self.recent_limit},
        )
        return parse_user_profile(username, payload)

    async def fetch_problem_difficulty(self, slug: str) -> str:
        payload = await self._post_graphql(QUESTION_DIFFICULTY_QUERY, {"titleSlug": slug})
        question = (payload.get("data") or {}).get("question")
        if not question or not question.get("difficulty"):
            errors = _error_messages(payload)
            raise UpstreamError(f"No difficulty for problem {slug}: {'; '.join(errors) or 'unknown slug'}")
        return question["difficulty"]

    async def fetch_contest_ranking(self, username: str) -> Optional[ContestRankingInfo]:
        payload = await self._post_graphql(CONTEST_RANKING_QUERY, {"username": username})
        return parse_contest_ranking(payload)


leetcode_client = LeetCodeClient()
