"""Pydantic schemas for API requests and responses."""

from vestri.schemas.film import (
    AwardsSummary,
    BackdropSet,
    CuratedReview,
    FilmMetadata,
    FilmSummary,
    ImdbRating,
    MediaCandidate,
    RatingBundle,
    RawReview,
)
from vestri.schemas.listing import (
    DaySchedule,
    FeaturedFilm,
    HeroResponse,
    ListingResponse,
    ReviewHighlight,
    ShowtimeDetailResponse,
)
from vestri.schemas.showtime import ShowtimeCreate, ShowtimeResponse, ShowtimeUpdate

__all__ = [
    "AwardsSummary",
    "BackdropSet",
    "CuratedReview",
    "FilmMetadata",
    "FilmSummary",
    "ImdbRating",
    "MediaCandidate",
    "RatingBundle",
    "RawReview",
    "DaySchedule",
    "FeaturedFilm",
    "HeroResponse",
    "ListingResponse",
    "ReviewHighlight",
    "ShowtimeDetailResponse",
    "ShowtimeCreate",
    "ShowtimeResponse",
    "ShowtimeUpdate",
]
