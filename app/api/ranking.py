from fastapi import APIRouter, HTTPException, Query
from typing import List, Optional

from app.exceptions import ValidationError
from app.schemas.ranking_schemas import ContestLeaderboardEntry, RankingEntry, TotalLeaderboardEntry
from app.schemas.tracking_schemas import ContestRefreshReport, TotalRefreshReport
from app.services.ranking_service import ranking_service
from app.services.stats_service import stats_service
from app.utils.logger import logger

router = APIRouter(tags=["ranking"])

@router.get("/ranking", response_model=List[RankingEntry])
async def get_ranking(type: Optional[str] = Query(None, description="today | this_week | this_month | total")):
    try:
        return await ranking_service.get_ranking(type)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f" Ranking query failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to build ranking")

@router.get("/refresh-total", response_model=TotalRefreshReport, response_model_exclude_none=True)
async def refresh_total():
    try:
        return await stats_service.refresh_total_stats()
    except Exception as e:
        logger.error(f" Total stats refresh failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to refresh total stats")

@router.get("/total-leaderboard", response_model=List[TotalLeaderboardEntry])
async def total_leaderboard():
    try:
        return await ranking_service.get_total_leaderboard()
    except Exception as e:
        logger.error(f" Total leaderboard failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to load total leaderboard")

@router.get("/refresh-contest", response_model=ContestRefreshReport, response_model_exclude_none=True)
async def refresh_contest():
    try:
        return await stats_service.refresh_contest_rankings()
    except Exception as e:
        logger.error(f" Contest ranking refresh failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to refresh contest rankings")

@router.get("/contest-leaderboard", response_model=List[ContestLeaderboardEntry])
async def contest_leaderboard():
    try:
        return await ranking_service.get_contest_leaderboard()
    except Exception as e:
        logger.error(f" Contest leaderboard failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to load contest leaderboard")
