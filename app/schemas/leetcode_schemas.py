# app/schemas/leetcode_schemas.py
"""
Shapes returned by the LeetCode GraphQL API, narrowed to what the tracker reads
"""

from pydantic import BaseModel
from typing import List, Optional

class ExternalSubmission(BaseModel):
    titleSlug: Optional[str] = None
    title: Optional[str] = None
    statusDisplay: Optional[str] = None
    timestamp: Optional[int] = None  # epoch seconds; the API sends it as a string
    difficulty: Optional[str] = None

class DifficultyCount(BaseModel):
    difficulty: str
    count: int = 0

class UserProfile(BaseModel):
    username: str
    matched_user: bool
    recent_submissions: Optional[List[ExternalSubmission]] = None
    accepted_counts: Optional[List[DifficultyCount]] = None

class ContestRankingInfo(BaseModel):
    attendedContestsCount: int = 0
    rating: float = 0
    globalRanking: int = 0
    totalParticipants: int = 1
    topPercentage: float = 100
    badge: Optional[str] = None

class LiveCountsResponse(BaseModel):
    username: str
    easy: int
    medium: int
    hard: int
    totalSolved: int
