"""Health check endpoint."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from vestri.database import get_db

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check(db: AsyncSession = Depends(get_db)) -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        API status plus whether the showtime database answered a ping
    """
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except (DBAPIError, OSError) as e:
        logger.warning(f"Health check database ping failed: {e}")
        database = "unavailable"
    return {"status": "ok", "database": database}
