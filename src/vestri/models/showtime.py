"""Showtime model for scheduled screenings at the venue."""

from datetime import date, time

from sqlalchemy import Boolean, Date, Index, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from vestri.models.base import Base, TimestampMixin


class Showtime(Base, TimestampMixin):
    """
    Scheduled screening of a film.

    The table predates this service and keeps the venue's original
    (Italian) column names. Attributes are mapped to named fields here so
    nothing outside the storage layer sees the raw column names.
    """

    __tablename__ = "movies2"
    __table_args__ = (
        Index("ix_movies2_date_start", "Data", "Orario Inizio"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    screening_date: Mapped[date] = mapped_column("Data", Date, nullable=False)
    film_external_id: Mapped[str] = mapped_column(
        "ID Film TMDb",
        String(50),
        nullable=False,
        index=True,
    )
    start_time: Mapped[time] = mapped_column("Orario Inizio", Time, nullable=False)
    end_time: Mapped[time] = mapped_column("Orario Fine", Time, nullable=False)
    language: Mapped[str] = mapped_column("Lingua", String(100), nullable=False)
    subtitle_language: Mapped[str | None] = mapped_column(
        "Sottotitoli", String(100), nullable=True
    )
    booking_reference: Mapped[str] = mapped_column(
        "Pretix Event ID", String(100), nullable=False
    )
    sold_out: Mapped[bool] = mapped_column(
        "Sold Out", Boolean, default=False, nullable=False
    )
    title: Mapped[str] = mapped_column("Titolo", String(500), nullable=False)
    annotation: Mapped[str | None] = mapped_column("Mark", Text, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<Showtime(id={self.id!r}, "
            f"film_external_id={self.film_external_id!r}, "
            f"screening_date={self.screening_date}, "
            f"start_time={self.start_time})>"
        )
