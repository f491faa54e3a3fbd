# app/models/contest_ranking.py
"""
Latest LeetCode contest standing per user
"""

from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey, CheckConstraint
from app.utils.timeutils import utcnow
from .base import Base

class ContestRanking(Base):
    __tablename__ = "contest_ranking_TB"
    __table_args__ = (
        CheckConstraint("TOP_PERCENTAGE >= 0 AND TOP_PERCENTAGE <= 100", name="ck_contest_top_percentage"),
    )

    RANKING_ID = Column(String(36), primary_key=True)
    USER_ID = Column(String(36), ForeignKey('user_TB.USER_ID'), unique=True, nullable=False)
    ATTENDED_CONTESTS_COUNT = Column(Integer, default=0, nullable=False)
    RATING = Column(Float, default=0, nullable=False)
    GLOBAL_RANKING = Column(Integer, default=0, nullable=False)
    TOTAL_PARTICIPANTS = Column(Integer, default=1, nullable=False)
    TOP_PERCENTAGE = Column(Float, default=100, nullable=False)
    BADGE_NAME = Column(String(50))
    CREATED_AT = Column(DateTime, default=utcnow, nullable=False)
    UPDATED_AT = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
