# app/models/base.py
"""
SQLAlchemy Base and async engine factory
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from app.config import settings

Base = declarative_base()


def build_engine(database_url: str) -> AsyncEngine:
    """Async engine for MySQL (aiomysql) or SQLite (aiosqlite)."""
    if database_url.startswith("sqlite"):
        # in-memory SQLite has to share one connection across sessions
        return create_async_engine(
            database_url,
            echo=settings.debug,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(
        database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
