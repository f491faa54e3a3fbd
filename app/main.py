# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api import leetcode, ranking, tracking, users
from app.services.scheduler_service import scheduler_service
from app.services.database_service import database_service
from app.utils.logger import setup_logger
from app.config import settings
from app import __version__
import uvicorn

logger = setup_logger()

app = FastAPI(
    title="LeetCode Tracker",
    description="Tracks daily LeetCode solves for a group of users and serves leaderboards",
    version=__version__,
    debug=settings.debug
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    logger.info(" LeetCode Tracker starting")
    logger.info(f" Debug mode: {settings.debug}")
    logger.info(f" Tracking window: {settings.track_window_hours}h, timezone {settings.timezone_name}, concurrency {settings.track_concurrency}")

    await database_service.create_tables()

    if settings.scheduler_enabled:
        scheduler_service.start()

@app.on_event("shutdown")
async def shutdown_event():
    logger.info(" LeetCode Tracker stopping")
    scheduler_service.stop()
    await database_service.close()

app.include_router(users.router)
app.include_router(tracking.router)
app.include_router(ranking.router)
app.include_router(leetcode.router)

@app.get("/")
async def root():
    return {
        "service": "LeetCode Tracker",
        "version": __version__,
        "status": "running",
        "features": [
            "rolling 24h solve tracking",
            "daily / weekly / monthly rankings",
            "lifetime and contest leaderboards",
        ]
    }

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "database": database_service.engine.dialect.name,
        "scheduler": {
            "enabled": settings.scheduler_enabled,
            "running": scheduler_service.scheduler.running,
        }
    }

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
