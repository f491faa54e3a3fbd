# app/services/registration_service.py
"""
User registration: a username is stored only after LeetCode confirms it
"""

from typing import Optional

from app.exceptions import NotFoundError, ValidationError
from app.models import TrackedUser
from app.services.database_service import database_service
from app.services.leetcode_client import leetcode_client
from app.utils.logger import logger


class RegistrationService:
    def __init__(self, client=None, db=None):
        self.client = client or leetcode_client
        self.db = db or database_service

    async def register_user(self, username: Optional[str], name: Optional[str] = None, email: Optional[str] = None) -> TrackedUser:
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required")

        existing = await self.db.get_user_by_username(username)
        if existing:
            raise ValidationError("User already exists in database")

        profile = await self.client.fetch_user_profile(username)
        if not profile.matched_user or profile.recent_submissions is None:
            logger.warning(f" Username not verifiable on LeetCode: {username}")
            raise NotFoundError("Username not found on LeetCode")

        user = await self.db.create_user(username=username, name=name, email=email)
        logger.info(f" Registered {username}")
        return user


registration_service = RegistrationService()
