# app/schemas/ranking_schemas.py
"""
Leaderboard rows
"""

from pydantic import BaseModel
from typing import Optional

class RankingEntry(BaseModel):
    username: str
    name: Optional[str] = None
    totalCount: int
    easy: int
    medium: int
    hard: int

class TotalLeaderboardEntry(BaseModel):
    username: str
    name: Optional[str] = None
    easy: int
    medium: int
    hard: int
    totalSolved: int
    lastUpdated: Optional[str] = None

class ContestLeaderboardEntry(BaseModel):
    username: str
    name: Optional[str] = None
    rating: float
    attendedContestsCount: int
    globalRanking: int
    totalParticipants: int
    topPercentage: float
    badge: Optional[str] = None
