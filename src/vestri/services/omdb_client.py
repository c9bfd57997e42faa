"""OMDb API client for awards and ratings."""

import logging
from typing import Any

import httpx

from vestri.config import settings
from vestri.schemas.film import AwardsSummary, RatingBundle
from vestri.services.ratings import empty_bundle, normalize
from vestri.utils.retry import retry_async

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (httpx.TransportError, httpx.HTTPStatusError)


class OMDbClient:
    """
    Client for the Open Movie Database (OMDb) API.

    OMDb reports lookup failures such as "Movie not found!" with HTTP 200
    and an ``Error`` field; those are treated as missing data.
    """

    BASE_URL = "https://www.omdbapi.com/"

    def __init__(self, api_key: str | None = None) -> None:
        self.api_key = api_key or settings.omdb_api_key
        if not self.api_key:
            logger.warning("OMDb API key not configured")

    async def _lookup(self, params: dict[str, Any]) -> dict[str, Any]:
        query = {"apikey": self.api_key, "plot": "short", "r": "json", **params}

        async with httpx.AsyncClient(timeout=settings.http_timeout) as client:

            async def fetch() -> Any:
                response = await client.get(self.BASE_URL, params=query)
                if response.status_code >= 500:
                    response.raise_for_status()
                return response

            response = await retry_async(
                fetch,
                retry_on=RETRYABLE_ERRORS,
                description="OMDb lookup",
            )
            response.raise_for_status()
            return response.json()

    async def get_awards(self, imdb_id: str) -> AwardsSummary:
        """
        Fetch the free-text awards summary for a film.

        Args:
            imdb_id: IMDb title ID (e.g. "tt0111161")

        Returns:
            Awards summary; ``error`` is set when the lookup failed
        """
        if not self.api_key:
            return AwardsSummary(error="OMDb API key not configured")

        try:
            data = await self._lookup({"i": imdb_id})
        except Exception as e:
            logger.error(f"OMDb awards error for {imdb_id}: {e}")
            return AwardsSummary(error="Failed to fetch awards information")

        if data.get("Error"):
            logger.info(f"OMDb awards lookup for {imdb_id} returned: {data['Error']}")
            return AwardsSummary(error=data["Error"])

        awards = data.get("Awards")
        return AwardsSummary(awards=awards if awards and awards != "N/A" else None)

    async def get_ratings(
        self,
        imdb_id: str | None,
        title: str,
        year: str | None = None,
    ) -> RatingBundle:
        """
        Fetch ratings by IMDb ID, falling back to a title (and year) search.

        Args:
            imdb_id: IMDb title ID, if known
            title: Film title for the fallback lookup
            year: Release year to narrow the fallback lookup

        Returns:
            Normalised ratings; all-null with ``error`` set when both lookups fail
        """
        if not self.api_key:
            return empty_bundle("OMDb API key not configured")

        try:
            data: dict[str, Any] = {"Error": "No IMDb ID"}
            if imdb_id:
                data = await self._lookup({"i": imdb_id})

            if data.get("Error"):
                logger.info(
                    f"OMDb ID lookup failed for {imdb_id!r} ({data['Error']}), "
                    f"trying title search for {title!r}"
                )
                params: dict[str, Any] = {"t": title}
                if year:
                    params["y"] = year
                data = await self._lookup(params)

                if data.get("Error"):
                    logger.warning(
                        f"OMDb title lookup failed for {title!r}: {data['Error']}"
                    )
                    return empty_bundle(data["Error"])

        except Exception as e:
            logger.error(f"OMDb ratings error for {imdb_id or title!r}: {e}")
            return empty_bundle("Failed to fetch ratings information")

        return normalize(data)
