"""
This module folds the raw calendar feed into one next pickup date per fraction.
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, List

from .dates import DayLike, get_timezone, parse_pickup_date, start_of_day
from .exceptions import ParsingError
from .models import CalendarEntry, FractionDefinition, ReductionPolicy

# Get a logger instance for this module
logger = logging.getLogger(__name__)

ReducedCalendar = Dict[int, datetime]


def reduce_calendar(
    entries: Iterable[CalendarEntry],
    reference_day: DayLike,
    policy: ReductionPolicy = ReductionPolicy.INCLUDE_PAST,
    tz=None,
) -> ReducedCalendar:
    """
    Reduces calendar entries to the earliest pickup date per fraction.

    Args:
        entries: The raw feed entries. A fraction may appear more than once.
        reference_day: The day the reduction is made for. Only used by the
            FUTURE_ONLY policy, and always taken at midnight.
        policy: Whether dates before the reference day are kept.
        tz: The timezone naive feed dates are interpreted in.

    Returns:
        A new mapping from fraction ID to its earliest date. Fractions without
        any remaining dates are left out.

    Raises:
        MalformedDateError: If any date string cannot be parsed.
    """
    zone = get_timezone(tz)
    cutoff = start_of_day(reference_day, zone)
    reduced: ReducedCalendar = {}

    for entry in entries:
        for date_string in entry.pickup_dates:
            pickup = parse_pickup_date(date_string, zone, entry.fraction_id)
            if policy is ReductionPolicy.FUTURE_ONLY and pickup < cutoff:
                continue
            current = reduced.get(entry.fraction_id)
            if current is None or pickup < current:
                reduced[entry.fraction_id] = pickup

    logger.debug(f"Reduced calendar to {len(reduced)} fractions with policy {policy.value}.")
    return reduced


def parse_feed(payload) -> List[CalendarEntry]:
    """
    Converts the calendar JSON into CalendarEntry objects.

    Raises:
        ParsingError: If the payload is not a list of fraction records.
    """
    if not isinstance(payload, list):
        raise ParsingError(f"Expected a list of calendar entries, got {type(payload).__name__}")

    entries = []
    for item in payload:
        try:
            fraction_id = int(item.get("FraksjonId", item.get("fractionId")))
            dates = item.get("Tommedatoer", item.get("pickupDates")) or []
        except (AttributeError, TypeError, ValueError) as e:
            raise ParsingError(f"Invalid calendar entry: {item!r}") from e
        if not isinstance(dates, list):
            raise ParsingError(f"Pickup dates for fraction {fraction_id} are not a list")
        entries.append(CalendarEntry(fraction_id=fraction_id, pickup_dates=tuple(dates)))
    return entries


def parse_fractions(payload) -> List[FractionDefinition]:
    """
    Converts the fraction JSON into FractionDefinition objects.

    Raises:
        ParsingError: If the payload is not a list of {Id, Navn} records.
    """
    if not isinstance(payload, list):
        raise ParsingError(f"Expected a list of fractions, got {type(payload).__name__}")

    fractions = []
    for item in payload:
        try:
            fraction_id = int(item.get("Id", item.get("id")))
            name = str(item.get("Navn", item.get("name", ""))).strip()
        except (AttributeError, TypeError, ValueError) as e:
            raise ParsingError(f"Invalid fraction: {item!r}") from e
        fractions.append(FractionDefinition(id=fraction_id, name=name))
    return fractions
