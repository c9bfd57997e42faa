"""TMDb API client for fetching film metadata and reviews."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from vestri.config import settings
from vestri.schemas.film import FilmMetadata, MediaCandidate, RawReview
from vestri.utils.retry import retry_async

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (httpx.TransportError, httpx.HTTPStatusError)


class TMDbClient:
    """Client for The Movie Database (TMDb) API."""

    BASE_URL = "https://api.themoviedb.org/3"

    def __init__(self, api_key: str | None = None) -> None:
        """
        Initialize TMDb client.

        Args:
            api_key: TMDb API key (uses settings if not provided)
        """
        self.api_key = api_key or settings.tmdb_api_key
        if not self.api_key:
            logger.warning("TMDb API key not configured")

    @staticmethod
    def preferred_language(original_language: str | None) -> str:
        """
        Language to request localized metadata in.

        Italian films keep their Italian metadata; everything else is
        requested in English, which TMDb covers most completely.
        """
        if original_language == "it":
            return "it"
        return "en"

    async def _get(
        self,
        client: httpx.AsyncClient,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """GET a TMDb endpoint, retrying transport failures and 5xx responses."""
        query = {"api_key": self.api_key, **(params or {})}

        async def fetch() -> Any:
            response = await client.get(f"{self.BASE_URL}{path}", params=query)
            if response.status_code >= 500:
                response.raise_for_status()
            return response

        response = await retry_async(
            fetch,
            retry_on=RETRYABLE_ERRORS,
            description=f"TMDb GET {path}",
        )
        response.raise_for_status()
        return response.json()

    async def get_movie_details(self, film_id: str) -> FilmMetadata | None:
        """
        Get film details, images, credits and translations.

        The film is fetched once untranslated to learn its original
        language, then again in the preferred language.

        Args:
            film_id: TMDb film ID

        Returns:
            Assembled film metadata or None if any request fails
        """
        if not self.api_key:
            logger.warning("Cannot fetch TMDb details without API key")
            return None

        try:
            async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
                basic = await self._get(client, f"/movie/{film_id}")
                original_language = basic.get("original_language")
                language = self.preferred_language(original_language)
                logger.debug(
                    f"Film {film_id}: original language {original_language!r}, "
                    f"requesting {language!r} metadata"
                )

                details = await self._get(
                    client, f"/movie/{film_id}", {"language": language}
                )
                images = await self._get(
                    client,
                    f"/movie/{film_id}/images",
                    {"include_image_language": f"{language},null,en"},
                )
                credits = await self._get(
                    client, f"/movie/{film_id}/credits", {"language": language}
                )
                translations = await self._get(client, f"/movie/{film_id}/translations")

        except Exception as e:
            logger.error(f"TMDb details error for ID {film_id}: {e}")
            return None

        try:
            return FilmMetadata(
                film_id=str(film_id),
                title=details.get("title") or basic.get("title") or "",
                original_language=original_language,
                poster_path=details.get("poster_path"),
                backdrop_path=details.get("backdrop_path"),
                overview=details.get("overview") or None,
                localized_overview=self.extract_overview(translations, settings.site_language),
                runtime=details.get("runtime") or None,
                release_date=details.get("release_date") or None,
                imdb_id=details.get("imdb_id") or None,
                directors=self.extract_directors(credits),
                cast=self.extract_cast(credits),
                logos=self.extract_images(images, "logos"),
                backdrops=self.extract_images(images, "backdrops"),
            )
        except ValidationError as e:
            logger.error(f"Unexpected TMDb payload for ID {film_id}: {e}")
            return None

    async def get_movie_reviews(self, film_id: str) -> list[RawReview]:
        """
        Get the unfiltered user reviews for a film.

        Args:
            film_id: TMDb film ID

        Returns:
            Raw reviews (empty list on error)
        """
        if not self.api_key:
            logger.warning("Cannot fetch TMDb reviews without API key")
            return []

        try:
            async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
                data = await self._get(
                    client, f"/movie/{film_id}/reviews", {"language": "en-US"}
                )
        except Exception as e:
            logger.error(f"TMDb reviews error for ID {film_id}: {e}")
            return []

        reviews: list[RawReview] = []
        for item in data.get("results", []):
            try:
                reviews.append(RawReview.model_validate(item))
            except ValidationError as e:
                logger.debug(f"Skipping malformed review for film {film_id}: {e}")

        logger.info(f"Found {len(reviews)} reviews for film {film_id}")
        return reviews

    def extract_images(self, images: dict[str, Any], kind: str) -> list[MediaCandidate]:
        """
        Extract logo or backdrop candidates from a TMDb images payload.

        Args:
            images: TMDb images response
            kind: "logos" or "backdrops"

        Returns:
            List of media candidates (entries without a file path are dropped)
        """
        return [
            MediaCandidate.model_validate(image)
            for image in images.get(kind) or []
            if image.get("file_path")
        ]

    def extract_overview(self, translations: dict[str, Any], language: str) -> str | None:
        """Overview text from the translation matching ``language``, if any."""
        for translation in translations.get("translations", []):
            if translation.get("iso_639_1") == language:
                overview = (translation.get("data") or {}).get("overview")
                if overview:
                    return overview
        return None

    def extract_directors(self, credits: dict[str, Any]) -> list[str]:
        """
        Extract director names from TMDb credits.

        Args:
            credits: TMDb credits data

        Returns:
            List of director names
        """
        crew = credits.get("crew", [])
        directors = [
            person["name"] for person in crew if person.get("job") == "Director"
        ]
        return directors

    def extract_cast(self, credits: dict[str, Any], n: int = 5) -> list[str]:
        """
        Extract top-billed cast member names from TMDb credits.

        Args:
            credits: TMDb credits data
            n: Maximum number of cast members to return

        Returns:
            List of actor names (up to n)
        """
        cast = credits.get("cast", [])
        return [person["name"] for person in cast[:n] if person.get("name")]
