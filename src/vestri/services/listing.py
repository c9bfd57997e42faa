"""Assemble the public listing page from the catalog and the metadata providers."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from datetime import date, datetime

from sqlalchemy.exc import DBAPIError

from vestri.config import settings
from vestri.exceptions import CatalogUnavailableError
from vestri.models import Showtime
from vestri.schemas.film import CuratedReview, FilmMetadata, FilmSummary
from vestri.schemas.listing import (
    DaySchedule,
    FeaturedFilm,
    HeroResponse,
    ListingResponse,
    ReviewHighlight,
)
from vestri.schemas.showtime import ShowtimeResponse
from vestri.services import grouping
from vestri.services.catalog import ShowtimeCatalog
from vestri.services.media import (
    backdrop_url,
    logo_url,
    poster_url,
    select_backdrops,
    select_logo,
)
from vestri.services.reviews import curate
from vestri.services.temporal import classify, is_bookable, starts_at
from vestri.services.tmdb_client import TMDbClient
from vestri.utils.retry import retry_async

logger = logging.getLogger(__name__)

MAX_REVIEW_HIGHLIGHTS = 3


def booking_url(showtime: Showtime) -> str:
    return f"{settings.ticketing_base_url}{showtime.booking_reference}"


def summarize_film(metadata: FilmMetadata) -> FilmSummary:
    """Resolve the chosen logo and backdrops into display URLs."""
    logo = select_logo(metadata.logos, metadata.original_language)
    backdrops = select_backdrops(metadata.backdrops)
    fallback_backdrop = backdrop_url(metadata.backdrop_path)

    return FilmSummary(
        film_id=metadata.film_id,
        title=metadata.title,
        original_language=metadata.original_language,
        overview=metadata.overview,
        localized_overview=metadata.localized_overview,
        runtime=metadata.runtime,
        release_date=metadata.release_date,
        imdb_id=metadata.imdb_id,
        directors=metadata.directors,
        cast=metadata.cast,
        poster_url=poster_url(metadata.poster_path),
        logo_url=logo_url(logo.file_path) if logo else None,
        hero_backdrop_url=backdrop_url(backdrops.hero.file_path) if backdrops else fallback_backdrop,
        banner_backdrop_url=backdrop_url(backdrops.banner.file_path) if backdrops else fallback_backdrop,
        review_backdrop_url=backdrop_url(backdrops.review.file_path) if backdrops else fallback_backdrop,
    )


def to_response(
    showtime: Showtime,
    now: datetime,
    metadata: FilmMetadata | None = None,
) -> ShowtimeResponse:
    response = ShowtimeResponse.model_validate(showtime)
    response.status = classify(now, showtime).value
    response.bookable = is_bookable(now, showtime)
    response.booking_url = booking_url(showtime)
    if metadata is not None:
        response.poster_url = poster_url(metadata.poster_path)
    return response


async def load_catalog(
    catalog: ShowtimeCatalog,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[Showtime]:
    """
    Read the showtimes, retrying connection failures.

    With either bound set only screenings dated within the (inclusive)
    range are read; otherwise the whole catalog.

    Raises:
        CatalogUnavailableError: If the store is still unreachable after all retries
    """

    async def attempt() -> list[Showtime]:
        try:
            if date_from or date_to:
                return await catalog.list_between(date_from or date.min, date_to or date.max)
            return await catalog.list_all()
        except (DBAPIError, OSError):
            await catalog.db.rollback()
            raise

    try:
        return await retry_async(
            attempt,
            retry_on=(DBAPIError, OSError),
            description="Catalog load",
        )
    except (DBAPIError, OSError) as e:
        raise CatalogUnavailableError("Could not connect to the database") from e


class FilmSelection:
    """
    The screening currently shown in the hero slot.

    Selecting a screening fetches its film metadata; if another screening
    is selected before that fetch completes, the older result is dropped
    instead of overwriting the newer selection.
    """

    def __init__(self) -> None:
        self.requested_id: int | None = None
        self.showtime: Showtime | None = None
        self.metadata: FilmMetadata | None = None

    async def select(
        self,
        showtime: Showtime,
        fetch: Callable[[str], Awaitable[FilmMetadata | None]],
    ) -> bool:
        """
        Select ``showtime`` and load its metadata with ``fetch``.

        Returns:
            True if the result was committed, False if it went stale
        """
        self.requested_id = showtime.id
        metadata = await fetch(showtime.film_external_id)

        if self.requested_id != showtime.id:
            logger.debug(
                f"Discarding metadata for showtime {showtime.id}; "
                f"showtime {self.requested_id} was selected meanwhile"
            )
            return False

        self.showtime = showtime
        self.metadata = metadata
        return True


class ListingBuilder:
    """
    Page-level controller for the public listing.

    The builder owns the hero selection. A builder kept across several
    selections (rather than one per request) only ever shows the most
    recently selected screening, whatever order the fetches finish in.
    """

    def __init__(self, tmdb_client: TMDbClient) -> None:
        self.tmdb = tmdb_client
        self.selection = FilmSelection()

    async def select_hero(
        self,
        showtime: Showtime,
        known: dict[str, FilmMetadata] | None = None,
    ) -> bool:
        """
        Point the hero slot at ``showtime``.

        Metadata in ``known`` (already fetched for the page) is reused,
        otherwise it is fetched from TMDb.

        Returns:
            False if a newer selection overtook this one
        """
        if known is not None:

            async def fetch(film_id: str) -> FilmMetadata | None:
                return known.get(film_id)

        else:
            fetch = self.tmdb.get_movie_details
        return await self.selection.select(showtime, fetch)

    async def fetch_film(self, film_id: str) -> tuple[FilmMetadata | None, list[CuratedReview]]:
        """Metadata and curated reviews for one film; failures yield empty results."""
        try:
            metadata, raw_reviews = await asyncio.gather(
                self.tmdb.get_movie_details(film_id),
                self.tmdb.get_movie_reviews(film_id),
            )
        except Exception as e:
            logger.error(f"Metadata fetch failed for film {film_id}: {e}", exc_info=True)
            return None, []
        return metadata, curate(raw_reviews)

    async def fetch_all(
        self,
        film_ids: Iterable[str],
    ) -> tuple[dict[str, FilmMetadata], dict[str, list[CuratedReview]]]:
        """
        Fetch every film concurrently.

        Each film's results land in its own slot keyed by film id; films
        whose metadata could not be fetched are simply absent.
        """
        film_ids = list(dict.fromkeys(film_ids))
        results = await asyncio.gather(*[self.fetch_film(film_id) for film_id in film_ids])

        metadata: dict[str, FilmMetadata] = {}
        reviews: dict[str, list[CuratedReview]] = {}
        for film_id, (film_metadata, film_reviews) in zip(film_ids, results):
            if film_metadata is not None:
                metadata[film_id] = film_metadata
            if film_reviews:
                reviews[film_id] = film_reviews

        logger.info(
            f"Fetched metadata for {len(metadata)}/{len(film_ids)} films, "
            f"reviews for {len(reviews)}"
        )
        return metadata, reviews

    @staticmethod
    def pick_hero(
        showtimes: list[Showtime],
        now: datetime,
        selected_id: int | None = None,
    ) -> Showtime | None:
        """The requested screening, else the next one to start, else the first."""
        if not showtimes:
            return None
        if selected_id is not None:
            for showtime in showtimes:
                if showtime.id == selected_id:
                    return showtime
        for showtime in showtimes:
            if starts_at(showtime, now.tzinfo) >= now:
                return showtime
        return showtimes[0]

    async def build(
        self,
        showtimes: list[Showtime],
        now: datetime,
        selected_id: int | None = None,
        full_week: bool = False,
    ) -> ListingResponse:
        """
        Lay out the listing page.

        Args:
            showtimes: Catalog ordered by date then start time
            now: Current instant in venue time
            selected_id: Showtime to show in the hero slot, if chosen
            full_week: Show the whole catalog in the week section

        Returns:
            The page content
        """
        metadata, reviews = await self.fetch_all(s.film_external_id for s in showtimes)
        summaries = {film_id: summarize_film(m) for film_id, m in metadata.items()}

        def card(showtime: Showtime) -> ShowtimeResponse:
            return to_response(showtime, now, metadata.get(showtime.film_external_id))

        hero: HeroResponse | None = None
        hero_showtime = self.pick_hero(showtimes, now, selected_id)
        if hero_showtime is not None:
            await self.select_hero(hero_showtime, metadata)
            selection = self.selection
            if selection.showtime is not None:
                hero = HeroResponse(
                    showtime=card(selection.showtime),
                    film=summarize_film(selection.metadata) if selection.metadata else None,
                    other_showtimes=[
                        card(s)
                        for s in grouping.other_showtimes(showtimes, selection.showtime, now)
                    ],
                )

        tomorrow = grouping.tomorrow_bucket(showtimes, now)
        highlights = [
            ReviewHighlight(
                showtime=card(s),
                film=summaries.get(s.film_external_id),
                review=reviews[s.film_external_id][0],
            )
            for s in tomorrow
            if reviews.get(s.film_external_id)
        ][:MAX_REVIEW_HIGHLIGHTS]

        return ListingResponse(
            generated_at=now,
            hero=hero,
            today=[card(s) for s in grouping.today_bucket(showtimes, now)],
            featured=[
                FeaturedFilm(showtime=card(s), film=summaries.get(s.film_external_id))
                for s in grouping.featured(showtimes, now)
            ],
            tomorrow=[card(s) for s in tomorrow],
            reviews=highlights,
            this_week=[card(s) for s in grouping.this_week_bucket(showtimes, now, full_week)],
            calendar=[
                DaySchedule(day=day, showtimes=[card(s) for s in day_showtimes])
                for day, day_showtimes in grouping.week_days(showtimes, now)
            ],
            films=summaries,
        )
