"""Showtime catalog: queries and mutations over the showtime table."""

import logging
from collections.abc import Iterable
from datetime import date, datetime

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vestri.models import Showtime
from vestri.schemas.showtime import ShowtimeCreate, ShowtimeUpdate

logger = logging.getLogger(__name__)


class ShowtimeCatalog:
    """Repository for showtime records, bound to one database session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def _ordered(self):
        return select(Showtime).order_by(Showtime.screening_date, Showtime.start_time)

    async def list_all(self) -> list[Showtime]:
        """All showtimes ordered by date, then start time."""
        result = await self.db.execute(self._ordered())
        return list(result.scalars().all())

    async def list_between(self, date_from: date, date_to: date) -> list[Showtime]:
        """Showtimes dated within [date_from, date_to], ordered."""
        stmt = self._ordered().where(
            Showtime.screening_date >= date_from,
            Showtime.screening_date <= date_to,
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_for_film(self, film_external_id: str) -> list[Showtime]:
        """Every screening of one film, ordered."""
        stmt = self._ordered().where(Showtime.film_external_id == film_external_id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get(self, showtime_id: int) -> Showtime | None:
        return await self.db.get(Showtime, showtime_id)

    async def create(self, data: ShowtimeCreate) -> Showtime:
        showtime = Showtime(**data.model_dump())
        self.db.add(showtime)
        await self.db.flush()
        logger.info(f"Created showtime {showtime.id} for film {showtime.film_external_id}")
        return showtime

    async def bulk_create(self, items: Iterable[ShowtimeCreate]) -> list[Showtime]:
        showtimes = [Showtime(**item.model_dump()) for item in items]
        self.db.add_all(showtimes)
        await self.db.flush()
        logger.info(f"Imported {len(showtimes)} showtimes")
        return showtimes

    async def update(self, showtime_id: int, changes: ShowtimeUpdate) -> Showtime | None:
        """
        Apply the fields set on ``changes`` to a showtime.

        Raises:
            ValueError: If the result would start at or after it ends
        """
        showtime = await self.get(showtime_id)
        if showtime is None:
            return None

        values = changes.model_dump(exclude_unset=True)
        start = values.get("start_time", showtime.start_time)
        end = values.get("end_time", showtime.end_time)
        if start >= end:
            raise ValueError("start_time must be before end_time")

        for field, value in values.items():
            setattr(showtime, field, value)
        await self.db.flush()
        logger.info(f"Updated showtime {showtime_id}: {sorted(values)}")
        return showtime

    async def delete(self, showtime_id: int) -> bool:
        result = await self.db.execute(delete(Showtime).where(Showtime.id == showtime_id))
        return result.rowcount > 0

    async def delete_past(self, now: datetime) -> int:
        """
        Delete showtimes that are over.

        That is every showtime dated before today, plus today's showtimes
        whose end time is at or before the current time of day.
        """
        today = now.date()
        current_time = now.time().replace(second=0, microsecond=0, tzinfo=None)
        stmt = delete(Showtime).where(
            or_(
                Showtime.screening_date < today,
                and_(
                    Showtime.screening_date == today,
                    Showtime.end_time <= current_time,
                ),
            )
        )
        result = await self.db.execute(stmt)
        logger.info(f"Deleted {result.rowcount} past showtimes")
        return result.rowcount

    async def delete_all(self) -> int:
        result = await self.db.execute(delete(Showtime))
        logger.info(f"Deleted all {result.rowcount} showtimes")
        return result.rowcount
