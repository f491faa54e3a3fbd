from fastapi import APIRouter, HTTPException
from typing import List

from app.exceptions import NotFoundError, ValidationError
from app.schemas.user_schemas import UserCreateRequest, UserCreateResponse, UserResponse
from app.services.database_service import database_service
from app.services.registration_service import registration_service
from app.utils.logger import logger

router = APIRouter(tags=["users"])

@router.post("/users", response_model=UserCreateResponse, status_code=201)
async def create_user(request: UserCreateRequest):
    try:
        logger.info(f" Registration request: {request.username}")

        user = await registration_service.register_user(
            username=request.username,
            name=request.name,
            email=request.email
        )

        return UserCreateResponse(
            message="User added successfully",
            user=UserResponse(**user.to_dict())
        )

    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f" Error in /users: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

@router.get("/users", response_model=List[UserResponse])
async def list_users():
    try:
        users = await database_service.list_users()
        return [UserResponse(**user.to_dict()) for user in users]
    except Exception as e:
        logger.error(f" User listing failed: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
