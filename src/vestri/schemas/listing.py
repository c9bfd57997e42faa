"""Pydantic schemas for the public listing page."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from vestri.schemas.film import AwardsSummary, CuratedReview, FilmSummary, RatingBundle
from vestri.schemas.showtime import ShowtimeResponse


class HeroResponse(BaseModel):
    """The selected screening shown at the top of the page."""

    showtime: ShowtimeResponse
    film: FilmSummary | None = None
    other_showtimes: list[ShowtimeResponse] = Field(default_factory=list)


class FeaturedFilm(BaseModel):
    showtime: ShowtimeResponse
    film: FilmSummary | None = None


class ReviewHighlight(BaseModel):
    showtime: ShowtimeResponse
    film: FilmSummary | None = None
    review: CuratedReview


class DaySchedule(BaseModel):
    day: date
    showtimes: list[ShowtimeResponse]


class ListingResponse(BaseModel):
    """Everything the listing page renders, computed for one instant."""

    generated_at: datetime
    hero: HeroResponse | None = None
    today: list[ShowtimeResponse]
    featured: list[FeaturedFilm]
    tomorrow: list[ShowtimeResponse]
    reviews: list[ReviewHighlight]
    this_week: list[ShowtimeResponse]
    calendar: list[DaySchedule]
    films: dict[str, FilmSummary]


class ShowtimeDetailResponse(BaseModel):
    """A single screening with the film's full metadata, awards and ratings."""

    showtime: ShowtimeResponse
    film: FilmSummary | None = None
    reviews: list[CuratedReview] = Field(default_factory=list)
    awards: AwardsSummary = Field(default_factory=AwardsSummary)
    ratings: RatingBundle = Field(default_factory=RatingBundle)
    other_showtimes: list[ShowtimeResponse] = Field(default_factory=list)
