# app/schemas/__init__.py
"""
Schema package. Only the shared pieces are re-exported; import the
per-feature modules directly to keep imports acyclic.
"""

from .commons_schemas import MessageResponse, DifficultyBreakdown

# from .user_schemas import UserCreateRequest, UserResponse
# from .leetcode_schemas import ExternalSubmission, UserProfile
# from .tracking_schemas import TrackReport, TotalRefreshReport
# from .ranking_schemas import RankingEntry, TotalLeaderboardEntry
