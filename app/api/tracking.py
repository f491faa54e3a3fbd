"""
Tracking API: synchronous and fire-and-forget runs of the daily tracking job
"""

from fastapi import APIRouter, BackgroundTasks, HTTPException

from app.schemas.commons_schemas import MessageResponse
from app.schemas.tracking_schemas import TrackReport
from app.services.tracking_service import tracking_service
from app.utils.logger import logger

router = APIRouter(tags=["tracking"])


@router.get("/track", response_model=TrackReport, response_model_exclude_none=True)
async def track_users():
    """Run the job and wait for the full report (holds the connection for the whole batch)."""
    try:
        return await tracking_service.track_all()
    except Exception as e:
        logger.error(f" Global tracking error: {e}")
        raise HTTPException(status_code=500, detail="Failed to track users")


@router.get("/background-track", response_model=MessageResponse, status_code=202)
async def background_track(background_tasks: BackgroundTasks):
    """Acknowledge immediately; the job runs after the response is sent."""
    background_tasks.add_task(tracking_service.run_in_background)
    logger.info(" Background tracking queued")
    return MessageResponse(message="Processing started")
