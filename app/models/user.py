# app/models/user.py
"""
Tracked LeetCode user
"""

from sqlalchemy import Column, String, DateTime
from app.utils.timeutils import utcnow
from .base import Base

class TrackedUser(Base):
    __tablename__ = "user_TB"

    USER_ID = Column(String(36), primary_key=True)
    USERNAME = Column(String(100), unique=True, nullable=False)  # LeetCode username
    NAME = Column(String(100))
    EMAIL = Column(String(100))
    CREATED_AT = Column(DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.USER_ID,
            "username": self.USERNAME,
            "name": self.NAME,
            "email": self.EMAIL,
            "created_at": self.CREATED_AT.isoformat() if self.CREATED_AT else None,
        }
