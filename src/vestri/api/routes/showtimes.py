"""Public listing and showtime API endpoints."""

import asyncio
import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vestri.database import get_db
from vestri.exceptions import CatalogUnavailableError
from vestri.schemas import (
    AwardsSummary,
    ListingResponse,
    RatingBundle,
    ShowtimeDetailResponse,
    ShowtimeResponse,
)
from vestri.services import grouping
from vestri.services.catalog import ShowtimeCatalog
from vestri.services.listing import (
    ListingBuilder,
    booking_url,
    load_catalog,
    summarize_film,
    to_response,
)
from vestri.services.omdb_client import OMDbClient
from vestri.services.reviews import curate
from vestri.services.temporal import is_bookable, local_now
from vestri.services.tmdb_client import TMDbClient

logger = logging.getLogger(__name__)
router = APIRouter()


def get_tmdb_client() -> TMDbClient:
    return TMDbClient()


def get_omdb_client() -> OMDbClient:
    return OMDbClient()


@router.get("/listing", response_model=ListingResponse)
async def get_listing(
    selected: int | None = Query(None, description="Showtime to feature in the hero slot"),
    full_week: bool = Query(False, description="Show the whole catalog in the week section"),
    db: AsyncSession = Depends(get_db),
    tmdb: TMDbClient = Depends(get_tmdb_client),
) -> ListingResponse:
    """
    Everything the public page shows: hero, today, featured films,
    tomorrow, critic reviews, the rest of the week and the calendar.
    """
    try:
        showtimes = await load_catalog(ShowtimeCatalog(db))
    except CatalogUnavailableError as e:
        logger.error(f"Listing unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e)) from e

    now = local_now()
    return await ListingBuilder(tmdb).build(
        showtimes, now, selected_id=selected, full_week=full_week
    )


@router.get("/showtimes", response_model=list[ShowtimeResponse])
async def get_showtimes(
    date_from: date | None = Query(None, description="First screening date (inclusive)"),
    date_to: date | None = Query(None, description="Last screening date (inclusive)"),
    db: AsyncSession = Depends(get_db),
) -> list[ShowtimeResponse]:
    """The catalog ordered by date and start time, without metadata."""
    try:
        showtimes = await load_catalog(ShowtimeCatalog(db), date_from, date_to)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e

    now = local_now()
    return [to_response(s, now) for s in showtimes]


@router.get("/showtimes/{showtime_id}", response_model=ShowtimeDetailResponse)
async def get_showtime(
    showtime_id: int,
    db: AsyncSession = Depends(get_db),
    tmdb: TMDbClient = Depends(get_tmdb_client),
    omdb: OMDbClient = Depends(get_omdb_client),
) -> ShowtimeDetailResponse:
    """
    A single screening with film details, reviews, awards and ratings.

    Awards and ratings are fetched concurrently once the film's IMDb ID
    is known; any provider failure leaves the corresponding part empty.
    """
    catalog = ShowtimeCatalog(db)
    showtime = await catalog.get(showtime_id)
    if showtime is None:
        raise HTTPException(status_code=404, detail="Showtime not found")

    now = local_now()
    siblings = await catalog.list_for_film(showtime.film_external_id)

    metadata, raw_reviews = await asyncio.gather(
        tmdb.get_movie_details(showtime.film_external_id),
        tmdb.get_movie_reviews(showtime.film_external_id),
    )

    awards = AwardsSummary()
    ratings = RatingBundle()
    if metadata is not None:
        if metadata.imdb_id:
            awards, ratings = await asyncio.gather(
                omdb.get_awards(metadata.imdb_id),
                omdb.get_ratings(metadata.imdb_id, metadata.title, metadata.release_year),
            )
        else:
            ratings = await omdb.get_ratings(None, metadata.title, metadata.release_year)

    return ShowtimeDetailResponse(
        showtime=to_response(showtime, now, metadata),
        film=summarize_film(metadata) if metadata else None,
        reviews=curate(raw_reviews),
        awards=awards,
        ratings=ratings,
        other_showtimes=[
            to_response(s, now, metadata)
            for s in grouping.other_showtimes(siblings, showtime, now)
        ],
    )


@router.get("/showtimes/{showtime_id}/book", response_class=RedirectResponse)
async def book_showtime(
    showtime_id: int,
    db: AsyncSession = Depends(get_db),
) -> RedirectResponse:
    """Redirect to the ticketing page for a screening that can still be booked."""
    showtime = await ShowtimeCatalog(db).get(showtime_id)
    if showtime is None:
        raise HTTPException(status_code=404, detail="Showtime not found")

    if not is_bookable(local_now(), showtime):
        detail = "Sold out" if showtime.sold_out else "Screening has already started"
        raise HTTPException(status_code=409, detail=detail)

    return RedirectResponse(booking_url(showtime), status_code=307)
