# app/schemas/user_schemas.py
"""
Tracked user request/response schemas
"""

from pydantic import BaseModel
from typing import Optional

class UserCreateRequest(BaseModel):
    # optional here so a missing username maps to 400, not FastAPI's 422
    username: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None

class UserResponse(BaseModel):
    id: str
    username: str
    name: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[str] = None

class UserCreateResponse(BaseModel):
    message: str
    user: UserResponse
