"""Pick the logo and backdrops that represent a film."""

from collections.abc import Iterable

from vestri.schemas.film import BackdropSet, MediaCandidate

TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
ENGLISH = "en"


def _best(candidates: list[MediaCandidate]) -> MediaCandidate | None:
    """Highest-scored candidate; the first one wins a tie."""
    if not candidates:
        return None
    return max(candidates, key=lambda c: c.vote_average)


def select_logo(
    candidates: Iterable[MediaCandidate],
    original_language: str | None,
) -> MediaCandidate | None:
    """
    Choose the logo to show in place of the title.

    Only PNG logos qualify (they have transparent backgrounds). Tiers are
    tried in order and the best-scored logo of the first non-empty tier
    is returned:

    1. English
    2. The film's original language
    3. Language-neutral
    4. Anything else

    Args:
        candidates: Logo images offered by TMDb
        original_language: ISO 639-1 code of the film's original language

    Returns:
        The chosen logo, or None when no PNG logo exists
    """
    pngs = [c for c in candidates if c.file_path.lower().endswith(".png")]
    if not pngs:
        return None

    tiers = (
        [c for c in pngs if c.iso_639_1 == ENGLISH],
        [c for c in pngs if original_language and c.iso_639_1 == original_language],
        [c for c in pngs if c.iso_639_1 is None],
        pngs,
    )
    for tier in tiers:
        best = _best(tier)
        if best is not None:
            return best
    return None


def select_backdrops(candidates: Iterable[MediaCandidate]) -> BackdropSet | None:
    """
    Assign language-neutral backdrops to the hero, banner and review slots.

    Neutral backdrops carry no text so they work anywhere. Backdrops are
    ranked by score with duplicate paths removed; films with fewer than
    three reuse the best one for the missing slots.
    """
    neutral = [c for c in candidates if c.iso_639_1 is None]
    ranked = sorted(neutral, key=lambda c: c.vote_average, reverse=True)

    unique: list[MediaCandidate] = []
    seen: set[str] = set()
    for candidate in ranked:
        if candidate.file_path in seen:
            continue
        seen.add(candidate.file_path)
        unique.append(candidate)

    if not unique:
        return None

    return BackdropSet(
        hero=unique[0],
        banner=unique[1] if len(unique) > 1 else unique[0],
        review=unique[2] if len(unique) > 2 else unique[0],
    )


def poster_url(path: str | None) -> str | None:
    if not path:
        return None
    return f"{TMDB_IMAGE_BASE_URL}/w500{path}"


def backdrop_url(path: str | None) -> str | None:
    if not path:
        return None
    return f"{TMDB_IMAGE_BASE_URL}/original{path}"


def logo_url(path: str | None) -> str | None:
    if not path:
        return None
    return f"{TMDB_IMAGE_BASE_URL}/original{path}"
