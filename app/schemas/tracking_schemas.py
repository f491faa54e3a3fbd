# app/schemas/tracking_schemas.py
"""
Batch job reports (tracking, total refresh, contest refresh)
"""

from pydantic import BaseModel
from typing import List, Optional

class TrackResult(BaseModel):
    user: str
    totalCount: Optional[int] = None
    easy: Optional[int] = None
    medium: Optional[int] = None
    hard: Optional[int] = None
    error: Optional[bool] = None

class TrackReport(BaseModel):
    status: str
    windowStart: str
    windowEnd: str
    dateKey: str
    results: List[TrackResult]

class TotalRefreshResult(BaseModel):
    user: str
    easy: Optional[int] = None
    medium: Optional[int] = None
    hard: Optional[int] = None
    totalSolved: Optional[int] = None
    error: Optional[bool] = None

class ContestRefreshResult(BaseModel):
    user: str
    rating: Optional[float] = None
    attendedContestsCount: Optional[int] = None
    skipped: Optional[bool] = None
    error: Optional[bool] = None

class TotalRefreshReport(BaseModel):
    status: str
    refreshedAt: str
    results: List[TotalRefreshResult]

class ContestRefreshReport(BaseModel):
    status: str
    refreshedAt: str
    results: List[ContestRefreshResult]
