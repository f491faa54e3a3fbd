# app/models/statistics.py
"""
All-time solved counts, mirrored from LeetCode (overwritten on every refresh)
"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from app.utils.timeutils import utcnow
from .base import Base

class TotalStats(Base):
    __tablename__ = "total_stats_TB"

    STAT_ID = Column(String(36), primary_key=True)
    USER_ID = Column(String(36), ForeignKey('user_TB.USER_ID'), unique=True, nullable=False)
    EASY_SOLVED = Column(Integer, default=0, nullable=False)
    MEDIUM_SOLVED = Column(Integer, default=0, nullable=False)
    HARD_SOLVED = Column(Integer, default=0, nullable=False)
    TOTAL_SOLVED = Column(Integer, default=0, nullable=False)
    LAST_UPDATED = Column(DateTime, default=utcnow, nullable=False)
