# app/models/__init__.py
"""
SQLAlchemy models for tracked users and their stored aggregates
"""

from .base import Base, build_engine, build_session_factory
from .user import TrackedUser
from .submission_summary import SubmissionSummary
from .statistics import TotalStats
from .contest_ranking import ContestRanking

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "TrackedUser",
    "SubmissionSummary",
    "TotalStats",
    "ContestRanking",
]
