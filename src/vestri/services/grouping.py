"""Partition the showtime catalog into the buckets shown on the listing page."""

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from vestri.models import Showtime
from vestri.services.temporal import (
    ScreeningStatus,
    classify,
    is_today,
    is_tomorrow,
    starts_at,
    week_end,
    week_start,
)

FEATURED_LIMIT = 3


def by_start_time(showtimes: Iterable[Showtime]) -> list[Showtime]:
    """Sort ascending by start time (stable, so catalog order breaks ties)."""
    return sorted(showtimes, key=lambda s: s.start_time)


def dedupe_by_film(showtimes: Iterable[Showtime]) -> list[Showtime]:
    """Keep the first showtime seen for each film, preserving order."""
    seen: set[str] = set()
    unique: list[Showtime] = []
    for showtime in showtimes:
        if showtime.film_external_id in seen:
            continue
        seen.add(showtime.film_external_id)
        unique.append(showtime)
    return unique


def today_bucket(showtimes: Iterable[Showtime], now: datetime) -> list[Showtime]:
    return by_start_time(s for s in showtimes if is_today(s, now))


def tomorrow_bucket(showtimes: Iterable[Showtime], now: datetime) -> list[Showtime]:
    """Tomorrow's screenings, one per film (the earliest)."""
    return dedupe_by_film(by_start_time(s for s in showtimes if is_tomorrow(s, now)))


def other_showtimes(
    showtimes: Iterable[Showtime],
    reference: Showtime,
    now: datetime,
) -> list[Showtime]:
    """
    Later screenings of the same film as ``reference``.

    The reference itself is always excluded. Only screenings starting
    strictly after ``now`` are returned, earliest first.
    """
    tz = now.tzinfo
    later = [
        s
        for s in showtimes
        if s.film_external_id == reference.film_external_id
        and s.id != reference.id
        and starts_at(s, tz) > now
    ]
    return sorted(later, key=lambda s: starts_at(s, tz))


def this_week_bucket(
    showtimes: Iterable[Showtime],
    now: datetime,
    full_week: bool = False,
) -> list[Showtime]:
    """
    Screenings for the rest of the week.

    The window starts the day after tomorrow so nothing repeats the
    today/tomorrow buckets, and ends on Sunday. Late in the week the
    window is empty. With ``full_week`` the whole catalog is returned.
    """
    showtimes = list(showtimes)
    if full_week:
        return showtimes

    first = now.date() + timedelta(days=2)
    last = week_end(now.date())
    if first > last:
        return []
    return [s for s in showtimes if first <= s.screening_date <= last]


def week_days(
    showtimes: Iterable[Showtime],
    now: datetime,
) -> list[tuple[date, list[Showtime]]]:
    """Calendar view: Monday to Sunday of the current week, each day sorted by start."""
    showtimes = list(showtimes)
    monday = week_start(now.date())
    days = [monday + timedelta(days=offset) for offset in range(7)]
    return [
        (day, by_start_time(s for s in showtimes if s.screening_date == day))
        for day in days
    ]


def featured(
    showtimes: Iterable[Showtime],
    now: datetime,
    limit: int = FEATURED_LIMIT,
) -> list[Showtime]:
    """Up to ``limit`` distinct films still to start today, earliest first."""
    upcoming = (s for s in showtimes if classify(now, s) is ScreeningStatus.UPCOMING)
    return dedupe_by_film(by_start_time(upcoming))[:limit]
