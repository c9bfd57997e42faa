"""Scheduled job that removes showtimes which have already ended."""

import logging

from sqlalchemy.exc import DBAPIError

from vestri.database import AsyncSessionLocal
from vestri.services.catalog import ShowtimeCatalog
from vestri.services.temporal import local_now
from vestri.utils.retry import retry_async

logger = logging.getLogger(__name__)


async def run_purge_past() -> int:
    """Delete past showtimes and return how many were removed.

    Creates its own DB session so it can be called from the scheduler
    without depending on a request context.
    """
    now = local_now()
    logger.info(f"Starting scheduled purge of showtimes ended before {now:%Y-%m-%d %H:%M}")

    async def purge() -> int:
        async with AsyncSessionLocal() as db:
            deleted = await ShowtimeCatalog(db).delete_past(now)
            await db.commit()
            return deleted

    try:
        deleted = await retry_async(
            purge,
            retry_on=(DBAPIError, OSError),
            description="Scheduled purge",
        )
    except (DBAPIError, OSError) as e:
        logger.error(f"Scheduled purge failed: {e}")
        return 0

    logger.info(f"Scheduled purge complete: {deleted} showtimes removed")
    return deleted
