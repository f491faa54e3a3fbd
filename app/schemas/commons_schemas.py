# app/schemas/commons_schemas.py
"""
Shared response pieces
"""

from pydantic import BaseModel

class MessageResponse(BaseModel):
    message: str

class DifficultyBreakdown(BaseModel):
    easy: int = 0
    medium: int = 0
    hard: int = 0

    @property
    def total(self) -> int:
        return self.easy + self.medium + self.hard
