"""Select critic reviews from recognised publications for display."""

import re
from collections.abc import Iterable

from vestri.schemas.film import CuratedReview, RawReview

MIN_RATING = 7
MIN_CONTENT_LENGTH = 100
MIN_SENTENCE_LENGTH = 40
MAX_SENTENCES = 2
MAX_REVIEWS = 3

# Ordered: the first publication with a matching variant wins.
PUBLICATIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("The Guardian", ("guardian", "the guardian", "theguardian.com")),
    ("The New York Times", ("nyt", "new york times", "nytimes.com")),
    ("Time Magazine", ("time", "time magazine", "time.com")),
    ("Rolling Stone", ("rolling stone", "rollingstone", "rollingstone.com")),
    ("The Telegraph", ("telegraph", "the telegraph", "telegraph.co.uk")),
    ("Los Angeles Times", ("la times", "los angeles times", "latimes.com")),
    ("The Washington Post", ("washington post", "washingtonpost", "wapo")),
    ("Entertainment Weekly", ("ew", "entertainment weekly", "ew.com")),
    ("The Atlantic", ("atlantic", "the atlantic", "theatlantic.com")),
    ("BBC", ("bbc", "bbc.com", "bbc.co.uk")),
    ("Empire", ("empire", "empire magazine", "empireonline")),
    ("Variety", ("variety", "variety.com")),
    ("IndieWire", ("indiewire", "indie wire", "indiewire.com")),
    ("The Hollywood Reporter", ("thr", "hollywood reporter", "hollywoodreporter")),
    ("Screen International", ("screen", "screen international", "screendaily")),
)

# Asides may span line breaks
_BRACKETED = re.compile(r"\[.*?\]", re.DOTALL)
_PARENTHESISED = re.compile(r"\(.*?\)", re.DOTALL)
_URL = re.compile(r"http\S+")
_WHITESPACE = re.compile(r"\s+")
_SENTENCE_END = re.compile(r"[.!?]+")


def match_publication(review: RawReview) -> str | None:
    """Canonical publication name found in the author, body or URL."""
    haystacks = (
        review.author.lower(),
        review.content.lower(),
        (review.url or "").lower(),
    )
    for name, variants in PUBLICATIONS:
        if any(variant in text for variant in variants for text in haystacks):
            return name
    return None


def trim_content(content: str) -> str:
    """
    Reduce review text to its first two substantial sentences.

    Bracketed and parenthesised asides and URLs are removed first.
    Sentences under 40 characters are skipped. Returns an empty string
    when no sentence qualifies. Trimming already-trimmed text is a no-op.
    """
    text = _BRACKETED.sub("", content)
    text = _PARENTHESISED.sub("", text)
    text = _URL.sub("", text)
    text = _WHITESPACE.sub(" ", text).strip()

    sentences = [
        sentence.strip()
        for sentence in _SENTENCE_END.split(text)
        if len(sentence.strip()) >= MIN_SENTENCE_LENGTH
    ]
    if not sentences:
        return ""
    return ". ".join(sentences[:MAX_SENTENCES]) + "."


def _qualifies(review: RawReview) -> bool:
    rating = review.author_details.rating
    if rating is None or rating < MIN_RATING:
        return False
    return len(review.content) >= MIN_CONTENT_LENGTH


def curate(raw_reviews: Iterable[RawReview]) -> list[CuratedReview]:
    """
    Pick up to three well-rated reviews, each from a different publication.

    Reviews are ranked by rating then recency. The ranked list is walked
    keeping the first review of each publication, so a publication with
    several top-rated reviews contributes only its best one.
    """
    candidates: list[CuratedReview] = []
    for review in raw_reviews:
        if not _qualifies(review):
            continue
        publication = match_publication(review)
        if publication is None:
            continue
        candidates.append(
            CuratedReview(
                id=review.id,
                author=review.author,
                publication=publication,
                content=trim_content(review.content),
                rating=review.author_details.rating,
                created_at=review.created_at,
                url=review.url,
            )
        )

    ranked = sorted(candidates, key=lambda r: (r.rating, r.created_at), reverse=True)

    curated: list[CuratedReview] = []
    publications: set[str] = set()
    for review in ranked:
        if review.publication in publications:
            continue
        publications.add(review.publication)
        curated.append(review)
        if len(curated) == MAX_REVIEWS:
            break
    return curated
