"""Pydantic schemas for showtime data."""

from datetime import date, time

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator, model_validator


class ShowtimeBase(BaseModel):
    """Fields an operator supplies for a screening."""

    screening_date: date
    film_external_id: str
    start_time: time
    end_time: time
    language: str
    subtitle_language: str | None = None
    booking_reference: str
    title: str
    sold_out: bool = False
    annotation: str | None = None

    @field_validator("film_external_id", "language", "booking_reference", "title")
    @classmethod
    def _required_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("subtitle_language", "annotation")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None


class ShowtimeCreate(ShowtimeBase):
    """Payload for creating a showtime."""

    @model_validator(mode="after")
    def _check_times(self) -> "ShowtimeCreate":
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class ShowtimeUpdate(BaseModel):
    """Partial update; only fields that are set are applied."""

    screening_date: date | None = None
    film_external_id: str | None = None
    start_time: time | None = None
    end_time: time | None = None
    language: str | None = None
    subtitle_language: str | None = None
    booking_reference: str | None = None
    title: str | None = None
    sold_out: bool | None = None
    annotation: str | None = None

    @field_validator(
        "screening_date",
        "film_external_id",
        "start_time",
        "end_time",
        "language",
        "booking_reference",
        "title",
        "sold_out",
    )
    @classmethod
    def _not_null(cls, value):
        # Only runs for fields present in the payload
        if value is None:
            raise ValueError("must not be null")
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("must not be blank")
        return value

    @model_validator(mode="after")
    def _check_times(self) -> "ShowtimeUpdate":
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class ShowtimeResponse(ShowtimeBase):
    """Showtime as returned by the API, with its display state."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str | None = None
    bookable: bool | None = None
    booking_url: str | None = None
    poster_url: str | None = None

    @field_serializer("start_time", "end_time")
    def _format_time(self, value: time) -> str:
        return value.strftime("%H:%M")
