"""Tests for the scheduled purge of ended showtimes."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

from sqlalchemy.exc import OperationalError

from vestri.services.temporal import VENUE_TZ
from vestri.tasks.purge_job import run_purge_past

NOW = datetime(2026, 10, 21, 4, 0, tzinfo=VENUE_TZ)


def make_session_factory(db: AsyncMock) -> MagicMock:
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=db)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=ctx)


async def test_purge_deletes_and_commits() -> None:
    db = AsyncMock()
    result = MagicMock()
    result.rowcount = 6
    db.execute = AsyncMock(return_value=result)

    with (
        patch("vestri.tasks.purge_job.AsyncSessionLocal", make_session_factory(db)),
        patch("vestri.tasks.purge_job.local_now", return_value=NOW),
    ):
        deleted = await run_purge_past()

    assert deleted == 6
    db.commit.assert_awaited_once()


async def test_purge_gives_up_quietly_when_database_down() -> None:
    db = AsyncMock()
    db.execute = AsyncMock(
        side_effect=OperationalError("DELETE", {}, ConnectionRefusedError("refused"))
    )

    with (
        patch("vestri.tasks.purge_job.AsyncSessionLocal", make_session_factory(db)),
        patch("vestri.tasks.purge_job.local_now", return_value=NOW),
    ):
        deleted = await run_purge_past()

    assert deleted == 0
    assert db.execute.await_count == 3
    db.commit.assert_not_awaited()
