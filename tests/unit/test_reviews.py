"""Tests for review curation."""

from datetime import datetime, timezone

import pytest

from vestri.schemas.film import AuthorDetails, RawReview
from vestri.services.reviews import curate, match_publication, trim_content

FIRST = "The director handles every scene with patience and a clear sense of purpose"
SECOND = "Its final act lands with real force and leaves the audience quiet"
BODY = f"{FIRST}. {SECOND}."


def make_review(
    id: str,
    author: str,
    rating: float | None = 8,
    content: str = BODY,
    day: int = 1,
    url: str | None = None,
) -> RawReview:
    return RawReview(
        id=id,
        author=author,
        content=content,
        url=url,
        created_at=datetime(2026, 1, day, tzinfo=timezone.utc),
        author_details=AuthorDetails(rating=rating),
    )


# ---------------------------------------------------------------------------
# match_publication
# ---------------------------------------------------------------------------


class TestMatchPublication:
    def test_matches_author(self):
        assert match_publication(make_review("1", "Variety Staff")) == "Variety"

    def test_matches_url(self):
        review = make_review("1", "Mark Kermode", url="https://www.empireonline.com/movies/x")
        assert match_publication(review) == "Empire"

    def test_matches_content(self):
        review = make_review("1", "Anonymous", content=f"As the Guardian put it: {BODY}")
        assert match_publication(review) == "The Guardian"

    def test_earlier_publication_wins(self):
        review = make_review("1", "Variety Staff", content=f"Reprinted by the Guardian. {BODY}")
        assert match_publication(review) == "The Guardian"

    def test_unknown_publication(self):
        assert match_publication(make_review("1", "Anonymous")) is None


# ---------------------------------------------------------------------------
# trim_content
# ---------------------------------------------------------------------------


class TestTrimContent:
    def test_keeps_first_two_long_sentences(self):
        third = "A third long sentence that should never appear in the output"
        assert trim_content(f"{FIRST}. {SECOND}. {third}.") == f"{FIRST}. {SECOND}."

    def test_skips_short_sentences(self):
        assert trim_content(f"Wow! {FIRST}. Great. {SECOND}!") == f"{FIRST}. {SECOND}."

    def test_removes_asides_and_links(self):
        raw = f"{FIRST} [spoilers] (mild). See https://example.org/x for more. {SECOND}."
        assert trim_content(raw) == f"{FIRST}. {SECOND}."

    def test_collapses_whitespace(self):
        raw = FIRST.replace(" ", "   \n ") + "."
        assert trim_content(raw) == f"{FIRST}."

    def test_no_qualifying_sentence_gives_empty_string(self):
        assert trim_content("Loved it. Go see it!") == ""

    def test_idempotent(self):
        once = trim_content(f"Wow! {FIRST} (really). {SECOND}!")
        assert trim_content(once) == once

    def test_asides_spanning_lines_removed_in_one_pass(self):
        once = trim_content(f"{FIRST} [minor\nspoilers] (see\nbelow). {SECOND}.")
        assert once == f"{FIRST}. {SECOND}."
        assert trim_content(once) == once


# ---------------------------------------------------------------------------
# curate
# ---------------------------------------------------------------------------


class TestCurate:
    def test_one_review_per_publication(self):
        variety = [
            make_review(f"v{i}", "Variety Staff", rating=r, day=i + 1)
            for i, r in enumerate([9, 8, 7, 9, 9])
        ]
        empire = make_review("e1", "Empire Magazine", rating=8, day=2)

        result = curate([*variety, empire])

        assert [r.publication for r in result] == ["Variety", "Empire"]
        # Most recent of the top-rated Variety reviews
        assert result[0].id == "v4"
        assert result[0].rating == 9

    def test_capped_at_three(self):
        reviews = [
            make_review("1", "Variety Staff", rating=9),
            make_review("2", "Empire Magazine", rating=8),
            make_review("3", "BBC Film", rating=10),
            make_review("4", "The Atlantic", rating=7),
        ]

        result = curate(reviews)

        assert [r.publication for r in result] == ["BBC", "Variety", "Empire"]

    @pytest.mark.parametrize("rating", [None, 6, 6.9])
    def test_low_or_missing_rating_excluded(self, rating):
        assert curate([make_review("1", "Variety Staff", rating=rating)]) == []

    def test_short_content_excluded(self):
        assert curate([make_review("1", "Variety Staff", content=FIRST)]) == []

    def test_unrecognised_publication_excluded(self):
        assert curate([make_review("1", "Anonymous")]) == []

    def test_content_trimmed(self):
        raw = f"{FIRST} (spoiler free). {SECOND}. Short one."
        result = curate([make_review("1", "Variety Staff", content=raw)])

        assert result[0].content == f"{FIRST}. {SECOND}."

    def test_empty_input(self):
        assert curate([]) == []
