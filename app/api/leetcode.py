from fastapi import APIRouter, HTTPException

from app.exceptions import NotFoundError, UpstreamError
from app.schemas.leetcode_schemas import LiveCountsResponse
from app.services.stats_service import stats_service
from app.utils.logger import logger

router = APIRouter(prefix="/leetcode", tags=["leetcode"])

@router.get("/{username}", response_model=LiveCountsResponse)
async def live_counts(username: str):
    """Current lifetime counts straight from LeetCode; nothing is stored."""
    try:
        return await stats_service.get_live_counts(username)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except UpstreamError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except Exception as e:
        logger.error(f" Live lookup failed for {username}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
