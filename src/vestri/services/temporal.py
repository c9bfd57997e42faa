"""Date and time classification of showtimes relative to the current instant."""

from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from zoneinfo import ZoneInfo

from vestri.config import settings
from vestri.models import Showtime

VENUE_TZ = ZoneInfo(settings.timezone)


class ScreeningStatus(str, Enum):
    UPCOMING = "upcoming"
    IN_PROGRESS = "in-progress"
    ENDED = "ended"
    NOT_TODAY = "not-today"


def local_now() -> datetime:
    """Current instant in the venue's timezone."""
    return datetime.now(VENUE_TZ)


def starts_at(showtime: Showtime, tz: tzinfo | None = None) -> datetime:
    return datetime.combine(showtime.screening_date, showtime.start_time, tzinfo=tz)


def ends_at(showtime: Showtime, tz: tzinfo | None = None) -> datetime:
    return datetime.combine(showtime.screening_date, showtime.end_time, tzinfo=tz)


def is_today(showtime: Showtime, now: datetime) -> bool:
    return showtime.screening_date == now.date()


def is_tomorrow(showtime: Showtime, now: datetime) -> bool:
    return showtime.screening_date == now.date() + timedelta(days=1)


def week_start(day: date) -> date:
    """Monday on or before ``day``."""
    return day - timedelta(days=day.weekday())


def week_end(day: date) -> date:
    """Sunday on or after ``day``."""
    return week_start(day) + timedelta(days=6)


def classify(now: datetime, showtime: Showtime) -> ScreeningStatus:
    """
    Classify a showtime against ``now``.

    Only screenings dated today get a time-based status; anything on
    another day is ``NOT_TODAY`` whether it is in the past or the future.
    Start and end are interpreted in ``now``'s timezone.

    Args:
        now: Current instant (venue local time)
        showtime: Showtime to classify

    Returns:
        The screening status
    """
    if not is_today(showtime, now):
        return ScreeningStatus.NOT_TODAY

    start = starts_at(showtime, now.tzinfo)
    end = ends_at(showtime, now.tzinfo)

    if now < start:
        return ScreeningStatus.UPCOMING
    if now <= end:
        return ScreeningStatus.IN_PROGRESS
    return ScreeningStatus.ENDED


def is_bookable(now: datetime, showtime: Showtime) -> bool:
    """Tickets can be bought for screenings that haven't started and aren't sold out."""
    if showtime.sold_out:
        return False
    return classify(now, showtime) in (ScreeningStatus.UPCOMING, ScreeningStatus.NOT_TODAY)
