"""Tests for partitioning the catalog into listing buckets."""

from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from vestri.models import Showtime
from vestri.services.grouping import (
    dedupe_by_film,
    featured,
    other_showtimes,
    this_week_bucket,
    today_bucket,
    tomorrow_bucket,
    week_days,
)

ROME = ZoneInfo("Europe/Rome")
MONDAY = date(2026, 10, 19)
WEDNESDAY = date(2026, 10, 21)
THURSDAY = date(2026, 10, 22)
FRIDAY = date(2026, 10, 23)
SATURDAY = date(2026, 10, 24)
SUNDAY = date(2026, 10, 25)
NEXT_MONDAY = date(2026, 10, 26)


def make_showtime(
    id: int,
    day: date,
    start: time,
    film_id: str = "550",
    end: time | None = None,
) -> Showtime:
    return Showtime(
        id=id,
        screening_date=day,
        film_external_id=film_id,
        start_time=start,
        end_time=end or time(23, 30),
        language="Italiano",
        subtitle_language=None,
        booking_reference=f"ev-{id}",
        sold_out=False,
        title=f"Film {film_id}",
        annotation=None,
    )


def at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=ROME)


# ---------------------------------------------------------------------------
# Today / tomorrow
# ---------------------------------------------------------------------------


def test_today_bucket_sorted_by_start():
    late = make_showtime(1, WEDNESDAY, time(21, 0))
    early = make_showtime(2, WEDNESDAY, time(16, 0))
    other_day = make_showtime(3, THURSDAY, time(10, 0))

    assert today_bucket([late, other_day, early], at(WEDNESDAY, 9)) == [early, late]


def test_today_bucket_keeps_every_screening_of_a_film():
    first = make_showtime(1, WEDNESDAY, time(16, 0), film_id="550")
    second = make_showtime(2, WEDNESDAY, time(21, 0), film_id="550")

    assert today_bucket([second, first], at(WEDNESDAY, 9)) == [first, second]


def test_tomorrow_bucket_one_per_film_earliest_first():
    a_late = make_showtime(1, THURSDAY, time(21, 0), film_id="a")
    b = make_showtime(2, THURSDAY, time(18, 0), film_id="b")
    a_early = make_showtime(3, THURSDAY, time(15, 0), film_id="a")

    assert tomorrow_bucket([a_late, b, a_early], at(WEDNESDAY, 9)) == [a_early, b]


def test_dedupe_keeps_first_occurrence():
    first = make_showtime(1, WEDNESDAY, time(20, 0), film_id="a")
    second = make_showtime(2, WEDNESDAY, time(16, 0), film_id="a")

    assert dedupe_by_film([first, second]) == [first]


# ---------------------------------------------------------------------------
# This week
# ---------------------------------------------------------------------------


class TestThisWeek:
    def test_window_starts_day_after_tomorrow_and_ends_sunday(self):
        showtimes = [
            make_showtime(1, WEDNESDAY, time(18, 0)),
            make_showtime(2, THURSDAY, time(18, 0)),
            make_showtime(3, FRIDAY, time(18, 0)),
            make_showtime(4, SUNDAY, time(18, 0)),
            make_showtime(5, NEXT_MONDAY, time(18, 0)),
        ]

        result = this_week_bucket(showtimes, at(WEDNESDAY, 9))

        assert [s.id for s in result] == [3, 4]

    def test_empty_late_in_the_week(self):
        showtimes = [make_showtime(1, SUNDAY, time(18, 0))]

        assert this_week_bucket(showtimes, at(SATURDAY, 9)) == []
        assert this_week_bucket(showtimes, at(SUNDAY, 9)) == []

    def test_friday_includes_only_sunday(self):
        showtimes = [
            make_showtime(1, SATURDAY, time(18, 0)),
            make_showtime(2, SUNDAY, time(18, 0)),
        ]

        assert [s.id for s in this_week_bucket(showtimes, at(FRIDAY, 9))] == [2]

    def test_full_week_returns_everything(self):
        showtimes = [
            make_showtime(1, WEDNESDAY, time(18, 0)),
            make_showtime(2, NEXT_MONDAY, time(18, 0)),
        ]

        assert this_week_bucket(showtimes, at(SATURDAY, 9), full_week=True) == showtimes


def test_week_days_covers_monday_to_sunday():
    tuesday = make_showtime(1, date(2026, 10, 20), time(18, 0))
    outside = make_showtime(2, NEXT_MONDAY, time(18, 0))

    days = week_days([tuesday, outside], at(WEDNESDAY, 9))

    assert [day for day, _ in days][0] == MONDAY
    assert [day for day, _ in days][-1] == SUNDAY
    assert days[1][1] == [tuesday]
    assert all(outside not in showtimes for _, showtimes in days)


# ---------------------------------------------------------------------------
# Other showtimes
# ---------------------------------------------------------------------------


class TestOtherShowtimes:
    def test_excludes_reference_and_started_screenings(self):
        reference = make_showtime(1, WEDNESDAY, time(18, 0))
        started = make_showtime(2, WEDNESDAY, time(10, 0))
        later_today = make_showtime(3, WEDNESDAY, time(21, 0))
        friday = make_showtime(4, FRIDAY, time(16, 0))
        other_film = make_showtime(5, WEDNESDAY, time(22, 0), film_id="999")

        result = other_showtimes(
            [friday, started, reference, other_film, later_today],
            reference,
            at(WEDNESDAY, 12),
        )

        assert result == [later_today, friday]

    def test_past_reference_still_excluded(self):
        reference = make_showtime(1, MONDAY, time(18, 0))

        assert other_showtimes([reference], reference, at(WEDNESDAY, 12)) == []


# ---------------------------------------------------------------------------
# Featured
# ---------------------------------------------------------------------------


class TestFeatured:
    def test_only_upcoming_distinct_films(self):
        showtimes = [
            make_showtime(1, WEDNESDAY, time(10, 0), film_id="a"),  # started
            make_showtime(2, WEDNESDAY, time(15, 0), film_id="b"),
            make_showtime(3, WEDNESDAY, time(17, 0), film_id="b"),
            make_showtime(4, WEDNESDAY, time(19, 0), film_id="c"),
            make_showtime(5, THURSDAY, time(19, 0), film_id="d"),  # not today
        ]

        result = featured(showtimes, at(WEDNESDAY, 12))

        assert [s.id for s in result] == [2, 4]

    def test_capped_at_three(self):
        showtimes = [
            make_showtime(i, WEDNESDAY, time(14 + i, 0), film_id=str(i)) for i in range(5)
        ]

        result = featured(showtimes, at(WEDNESDAY, 12))

        assert [s.id for s in result] == [0, 1, 2]
