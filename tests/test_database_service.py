# tests/test_database_service.py

import asyncio

import pytest

from app.exceptions import TrackerError
from app.services.database_service import DatabaseService


def test_unsupported_dialect_is_rejected_at_construction():
    with pytest.raises(TrackerError, match="mssql"):
        DatabaseService("mssql+aioodbc://user:pw@host/tracker")


@pytest.mark.asyncio
async def test_overlapping_summary_upserts_on_shared_sqlite_connection(db):
    user = await db.create_user("alice")

    await asyncio.gather(*(
        db.upsert_submission_summary(user.USER_ID, "2024-06-15", easy=1, medium=0, hard=0)
        for _ in range(4)
    ))

    summaries = await db.get_summaries(user.USER_ID)
    assert len(summaries) == 1
    assert summaries[0].TOTAL_COUNT == 1
