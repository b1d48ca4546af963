"""
Date helpers that pin every comparison to a named timezone.
"""
from datetime import date, datetime, time
from typing import Union
from zoneinfo import ZoneInfo

from .config import TIMEZONE
from .exceptions import MalformedDateError

DayLike = Union[date, datetime]


def get_timezone(tz=None) -> ZoneInfo:
    """Returns a ZoneInfo for a key, passing ZoneInfo instances through."""
    if tz is None:
        return ZoneInfo(TIMEZONE)
    if isinstance(tz, ZoneInfo):
        return tz
    return ZoneInfo(tz)


def localize(value: datetime, tz=None) -> datetime:
    """Naive values are wall-clock time in tz, aware values are converted."""
    zone = get_timezone(tz)
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value.astimezone(zone)


def start_of_day(value: DayLike, tz=None) -> datetime:
    """Returns midnight of the day containing value, in tz."""
    zone = get_timezone(tz)
    if isinstance(value, datetime):
        value = localize(value, zone).date()
    return datetime.combine(value, time.min, tzinfo=zone)


def parse_pickup_date(value: str, tz=None, fraction_id=None) -> datetime:
    """
    Parses an ISO-8601 pickup date from the feed.

    Raises:
        MalformedDateError: If the value is not a parsable date string.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except (AttributeError, TypeError, ValueError) as e:
        raise MalformedDateError(value, fraction_id) from e
    return localize(parsed, tz)
