# app/services/database_service.py
"""
Database service
SQLAlchemy async access to tracked users and their stored aggregates
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, Iterable, List, Optional
import asyncio
import uuid

from sqlalchemy import func
from sqlalchemy.engine import make_url
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.future import select

from app.config import settings
from app.exceptions import TrackerError, ValidationError
from app.models import (
    Base,
    ContestRanking,
    SubmissionSummary,
    TotalStats,
    TrackedUser,
    build_engine,
    build_session_factory,
)
from app.utils.logger import logger
from app.utils.timeutils import utcnow


SUPPORTED_DIALECTS = ("mysql", "postgresql", "sqlite")


class DatabaseService:
    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.sqlalchemy_url
        backend = make_url(self.database_url).get_backend_name()
        if backend not in SUPPORTED_DIALECTS:
            raise TrackerError(f"Unsupported database dialect: {backend}")
        self.engine = build_engine(self.database_url)
        self.async_session = build_session_factory(self.engine)
        # StaticPool shares one sqlite connection, so sessions must not interleave
        self._sqlite_lock = asyncio.Lock()
        logger.info(f" DatabaseService ready ({self.engine.dialect.name})")

    @asynccontextmanager
    async def session(self):
        if self.engine.dialect.name == "sqlite":
            async with self._sqlite_lock:
                async with self.async_session() as session:
                    yield session
        else:
            async with self.async_session() as session:
                yield session

    async def create_tables(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(" Tables created")

    def _upsert_statement(self, model, values: Dict[str, Any], key_columns: Iterable[str], update_columns: Iterable[str]):
        """Single INSERT ... ON CONFLICT/DUPLICATE KEY UPDATE, atomic per key."""
        dialect = self.engine.dialect.name
        update_columns = list(update_columns)

        if dialect == "mysql":
            stmt = mysql_insert(model).values(**values)
            return stmt.on_duplicate_key_update({col: stmt.inserted[col] for col in update_columns})
        if dialect in ("postgresql", "sqlite"):
            builder = pg_insert if dialect == "postgresql" else sqlite_insert
            stmt = builder(model).values(**values)
            return stmt.on_conflict_do_update(
                index_elements=list(key_columns),
                set_={col: stmt.excluded[col] for col in update_columns},
            )
        raise TrackerError(f"Unsupported database dialect: {dialect}")

    # ---------------------------------------------------------------- users

    async def get_user_by_username(self, username: str) -> Optional[TrackedUser]:
        try:
            async with self.session() as session:
                query = select(TrackedUser).where(TrackedUser.USERNAME == username)
                result = await session.execute(query)
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f" User lookup failed: {e}")
            raise

    async def list_users(self) -> List[TrackedUser]:
        try:
            async with self.session() as session:
                result = await session.execute(select(TrackedUser).order_by(TrackedUser.CREATED_AT))
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f" User listing failed: {e}")
            raise

    async def create_user(self, username: str, name: Optional[str] = None, email: Optional[str] = None) -> TrackedUser:
        try:
            async with self.session() as session:
                user = TrackedUser(
                    USER_ID=str(uuid.uuid4()),
                    USERNAME=username,
                    NAME=name,
                    EMAIL=email,
                    CREATED_AT=utcnow(),
                )
                session.add(user)
                await session.commit()
                logger.info(f" User saved: {username}")
                return user
        except IntegrityError as e:
            logger.warning(f" Duplicate user insert: {username}")
            raise ValidationError("User already exists in database") from e
        except SQLAlchemyError as e:
            logger.error(f" User save failed: {e}")
            raise

    # ------------------------------------------------------------ summaries

    async def upsert_submission_summary(self, user_id: str, summary_date: str, easy: int, medium: int, hard: int):
        """Replace the (user, date) summary; never increments."""
        values = {
            "SUMMARY_ID": str(uuid.uuid4()),
            "USER_ID": user_id,
            "SUMMARY_DATE": summary_date,
            "TOTAL_COUNT": easy + medium + hard,
            "EASY_COUNT": easy,
            "MEDIUM_COUNT": medium,
            "HARD_COUNT": hard,
            "UPDATED_AT": utcnow(),
        }
        stmt = self._upsert_statement(
            SubmissionSummary,
            values,
            key_columns=("USER_ID", "SUMMARY_DATE"),
            update_columns=("TOTAL_COUNT", "EASY_COUNT", "MEDIUM_COUNT", "HARD_COUNT", "UPDATED_AT"),
        )
        try:
            async with self.session() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f" Summary upsert failed: user_id={user_id}, date={summary_date}: {e}")
            raise

    async def get_summaries(self, user_id: Optional[str] = None) -> List[SubmissionSummary]:
        """Raw per-row read; rankings go through aggregate_summaries."""
        async with self.session() as session:
            query = select(SubmissionSummary).order_by(SubmissionSummary.SUMMARY_DATE)
            if user_id is not None:
                query = query.where(SubmissionSummary.USER_ID == user_id)
            result = await session.execute(query)
            return list(result.scalars().all())

    async def aggregate_summaries(self, date_filter=None) -> List[Dict[str, Any]]:
        """Sum summaries per user (optionally filtered), joined with the user row."""
        total = func.sum(SubmissionSummary.TOTAL_COUNT).label("total_count")
        query = (
            select(
                TrackedUser.USERNAME,
                TrackedUser.NAME,
                total,
                func.sum(SubmissionSummary.EASY_COUNT).label("easy"),
                func.sum(SubmissionSummary.MEDIUM_COUNT).label("medium"),
                func.sum(SubmissionSummary.HARD_COUNT).label("hard"),
            )
            .select_from(SubmissionSummary)
            .join(TrackedUser, TrackedUser.USER_ID == SubmissionSummary.USER_ID)
            .group_by(TrackedUser.USER_ID, TrackedUser.USERNAME, TrackedUser.NAME)
            .order_by(total.desc(), TrackedUser.USERNAME)
        )
        if date_filter is not None:
            query = query.where(date_filter)

        try:
            async with self.session() as session:
                result = await session.execute(query)
                return [
                    {
                        "username": row.USERNAME,
                        "name": row.NAME,
                        "totalCount": int(row.total_count or 0),
                        "easy": int(row.easy or 0),
                        "medium": int(row.medium or 0),
                        "hard": int(row.hard or 0),
                    }
                    for row in result.all()
                ]
        except SQLAlchemyError as e:
            logger.error(f" Ranking aggregation failed: {e}")
            raise

    # ---------------------------------------------------------- total stats

    async def upsert_total_stats(self, user_id: str, easy: int, medium: int, hard: int, refreshed_at=None):
        values = {
            "STAT_ID": str(uuid.uuid4()),
            "USER_ID": user_id,
            "EASY_SOLVED": easy,
            "MEDIUM_SOLVED": medium,
            "HARD_SOLVED": hard,
            "TOTAL_SOLVED": easy + medium + hard,
            "LAST_UPDATED": refreshed_at or utcnow(),
        }
        stmt = self._upsert_statement(
            TotalStats,
            values,
            key_columns=("USER_ID",),
            update_columns=("EASY_SOLVED", "MEDIUM_SOLVED", "HARD_SOLVED", "TOTAL_SOLVED", "LAST_UPDATED"),
        )
        try:
            async with self.session() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f" Total stats upsert failed: user_id={user_id}: {e}")
            raise

    async def get_total_leaderboard(self) -> List[Dict[str, Any]]:
        query = (
            select(TotalStats, TrackedUser.USERNAME, TrackedUser.NAME)
            .join(TrackedUser, TrackedUser.USER_ID == TotalStats.USER_ID)
            .order_by(TotalStats.TOTAL_SOLVED.desc(), TrackedUser.USERNAME)
        )
        async with self.session() as session:
            result = await session.execute(query)
            return [
                {
                    "username": username,
                    "name": name,
                    "easy": stats.EASY_SOLVED,
                    "medium": stats.MEDIUM_SOLVED,
                    "hard": stats.HARD_SOLVED,
                    "totalSolved": stats.TOTAL_SOLVED,
                    "lastUpdated": stats.LAST_UPDATED.isoformat() if stats.LAST_UPDATED else None,
                }
                for stats, username, name in result.all()
            ]

    # ------------------------------------------------------ contest ranking

    async def upsert_contest_ranking(self, user_id: str, ranking: Dict[str, Any]):
        now = utcnow()
        values = {
            "RANKING_ID": str(uuid.uuid4()),
            "USER_ID": user_id,
            "ATTENDED_CONTESTS_COUNT": ranking["attendedContestsCount"],
            "RATING": ranking["rating"],
            "GLOBAL_RANKING": ranking["globalRanking"],
            "TOTAL_PARTICIPANTS": ranking["totalParticipants"],
            "TOP_PERCENTAGE": ranking["topPercentage"],
            "BADGE_NAME": ranking.get("badge"),
            "CREATED_AT": now,
            "UPDATED_AT": now,
        }
        stmt = self._upsert_statement(
            ContestRanking,
            values,
            key_columns=("USER_ID",),
            update_columns=(
                "ATTENDED_CONTESTS_COUNT",
                "RATING",
                "GLOBAL_RANKING",
                "TOTAL_PARTICIPANTS",
                "TOP_PERCENTAGE",
                "BADGE_NAME",
                "UPDATED_AT",
            ),
        )
        try:
            async with self.session() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f" Contest ranking upsert failed: user_id={user_id}: {e}")
            raise

    async def get_contest_leaderboard(self) -> List[Dict[str, Any]]:
        query = (
            select(ContestRanking, TrackedUser.USERNAME, TrackedUser.NAME)
            .join(TrackedUser, TrackedUser.USER_ID == ContestRanking.USER_ID)
            .order_by(ContestRanking.RATING.desc(), TrackedUser.USERNAME)
        )
        async with self.session() as session:
            result = await session.execute(query)
            return [
                {
                    "username": username,
                    "name": name,
                    "rating": ranking.RATING,
                    "attendedContestsCount": ranking.ATTENDED_CONTESTS_COUNT,
                    "globalRanking": ranking.GLOBAL_RANKING,
                    "totalParticipants": ranking.TOTAL_PARTICIPANTS,
                    "topPercentage": ranking.TOP_PERCENTAGE,
                    "badge": ranking.BADGE_NAME,
                }
                for ranking, username, name in result.all()
            ]

    async def close(self):
        await self.engine.dispose()
        logger.info(" Database connections closed")


database_service = DatabaseService()
