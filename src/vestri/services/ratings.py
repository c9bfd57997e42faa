"""Normalise OMDb rating payloads into a single bundle."""

from typing import Any

from vestri.schemas.film import ImdbRating, RatingBundle

NOT_AVAILABLE = "N/A"


def _present(value: Any) -> str | None:
    if value is None or value == "" or value == NOT_AVAILABLE:
        return None
    return str(value)


def _rating_from_list(payload: dict[str, Any], source: str) -> str | None:
    ratings = payload.get("Ratings")
    if not isinstance(ratings, list):
        return None
    for entry in ratings:
        if isinstance(entry, dict) and entry.get("Source") == source:
            return _present(entry.get("Value"))
    return None


def empty_bundle(error: str | None = None) -> RatingBundle:
    return RatingBundle(error=error)


def normalize(payload: dict[str, Any]) -> RatingBundle:
    """
    Build a rating bundle from an OMDb title payload.

    Any source the payload lacks (or reports as "N/A") comes back as None.

    Args:
        payload: OMDb JSON response for a single title

    Returns:
        Normalised ratings
    """
    metacritic = _rating_from_list(payload, "Metacritic")
    if metacritic is not None:
        metacritic = metacritic.split("/")[0]
    else:
        metacritic = _present(payload.get("Metascore"))

    return RatingBundle(
        imdb=ImdbRating(
            rating=_present(payload.get("imdbRating")),
            votes=_present(payload.get("imdbVotes")),
        ),
        rotten_tomatoes=_rating_from_list(payload, "Rotten Tomatoes"),
        metacritic=metacritic,
    )
