# app/models/submission_summary.py
"""
Per-user, per-day accepted counts written by the tracking job
"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint
from app.utils.timeutils import utcnow
from .base import Base

class SubmissionSummary(Base):
    __tablename__ = "submission_summary_TB"
    __table_args__ = (
        # one row per user per day
        UniqueConstraint("USER_ID", "SUMMARY_DATE", name="uq_summary_user_date"),
    )

    SUMMARY_ID = Column(String(36), primary_key=True)
    USER_ID = Column(String(36), ForeignKey('user_TB.USER_ID'), nullable=False)
    SUMMARY_DATE = Column(String(10), nullable=False)  # YYYY-MM-DD, tracking timezone
    TOTAL_COUNT = Column(Integer, default=0, nullable=False)
    EASY_COUNT = Column(Integer, default=0, nullable=False)
    MEDIUM_COUNT = Column(Integer, default=0, nullable=False)
    HARD_COUNT = Column(Integer, default=0, nullable=False)
    UPDATED_AT = Column(DateTime, default=utcnow, nullable=False)
