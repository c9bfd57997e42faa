"""Pydantic schemas for film metadata, reviews and ratings."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MediaCandidate(BaseModel):
    """A logo or backdrop image offered by TMDb."""

    model_config = ConfigDict(extra="ignore")

    file_path: str
    iso_639_1: str | None = None  # None means language-neutral
    vote_average: float = 0.0
    width: int | None = None
    height: int | None = None
    aspect_ratio: float | None = None


class BackdropSet(BaseModel):
    """Backdrops chosen for each slot on the page."""

    hero: MediaCandidate
    banner: MediaCandidate
    review: MediaCandidate


class FilmMetadata(BaseModel):
    """Film details assembled from the TMDb endpoints."""

    film_id: str
    title: str
    original_language: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    overview: str | None = None
    localized_overview: str | None = None
    runtime: int | None = None
    release_date: str | None = None
    imdb_id: str | None = None
    directors: list[str] = Field(default_factory=list)
    cast: list[str] = Field(default_factory=list)
    logos: list[MediaCandidate] = Field(default_factory=list)
    backdrops: list[MediaCandidate] = Field(default_factory=list)

    @property
    def release_year(self) -> str | None:
        if not self.release_date or len(self.release_date) < 4:
            return None
        return self.release_date[:4]


class AuthorDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    rating: float | None = None
    avatar_path: str | None = None


class RawReview(BaseModel):
    """Review as returned by the TMDb reviews endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: str
    author: str = ""
    content: str = ""
    url: str | None = None
    created_at: datetime
    author_details: AuthorDetails = Field(default_factory=AuthorDetails)


class CuratedReview(BaseModel):
    """Review attributed to a recognised publication, trimmed for display."""

    id: str
    author: str
    publication: str
    content: str
    rating: float
    created_at: datetime
    url: str | None = None


class ImdbRating(BaseModel):
    rating: str | None = None
    votes: str | None = None


class RatingBundle(BaseModel):
    """Ratings from IMDb, Rotten Tomatoes and Metacritic, each optional."""

    imdb: ImdbRating = Field(default_factory=ImdbRating)
    rotten_tomatoes: str | None = None
    metacritic: str | None = None
    error: str | None = None


class AwardsSummary(BaseModel):
    awards: str | None = None
    error: str | None = None


class FilmSummary(BaseModel):
    """Film metadata shaped for display, with resolved image URLs."""

    film_id: str
    title: str
    original_language: str | None = None
    overview: str | None = None
    localized_overview: str | None = None
    runtime: int | None = None
    release_date: str | None = None
    imdb_id: str | None = None
    directors: list[str] = Field(default_factory=list)
    cast: list[str] = Field(default_factory=list)
    poster_url: str | None = None
    logo_url: str | None = None
    hero_backdrop_url: str | None = None
    banner_backdrop_url: str | None = None
    review_backdrop_url: str | None = None
