"""
This module reconciles the exposed capability set with the latest calendar.
"""
import logging
from typing import Iterable, Mapping, Optional

from .aggregator import PickupAggregator, days_until
from .calendar_reducer import ReducedCalendar
from .dates import DayLike
from .models import NEXT_PICKUP_SUMMARY, CapabilityDiff, FractionDefinition, WasteCategory
from .text_formatter import format_countdown, format_pickup_date

logger = logging.getLogger(__name__)


def reconcile(
    previous: Iterable[str],
    reduced: ReducedCalendar,
    fractions: Iterable[FractionDefinition],
    settings: Optional[Mapping],
    reference_day: DayLike,
    locale=None,
    tz=None,
) -> CapabilityDiff:
    """
    Works out which capabilities to add, remove and update.

    A category capability is exposed iff the category has a pickup date and
    is not disabled in settings. The summary capability is exposed iff there
    is an earliest pickup among the enabled categories, and is re-added last
    on every call instead of being updated in place.

    Args:
        previous: Capability IDs currently exposed, summary included.
        reduced: The reduced calendar of the current refresh.
        fractions: Fraction metadata of the current refresh.
        settings: Per-category enabled flags; missing means enabled.
        reference_day: "Today", used for the countdown.
        locale: Language of the display values.
        tz: Timezone for day arithmetic.

    Returns:
        A CapabilityDiff; nothing is mutated.
    """
    previous = frozenset(previous)
    aggregator = PickupAggregator(reduced, fractions, settings, tz)

    values = {}
    for category, (pickup, _name) in aggregator.next_dates().items():
        if aggregator.is_enabled(category):
            values[category.capability_id] = format_pickup_date(pickup, locale)

    # Category order keeps the instructions stable between runs
    order = [c.capability_id for c in WasteCategory]
    wanted = [cap for cap in order if cap in values]
    # Only waste_ capabilities are pruned
    stale = [cap for cap in previous if cap.startswith("waste_") and cap not in values]

    diff = CapabilityDiff(
        previous=previous,
        to_add=[cap for cap in wanted if cap not in previous],
        to_remove=sorted(stale, key=lambda cap: (order.index(cap) if cap in order else len(order), cap)),
        to_update=[cap for cap in wanted if cap in previous],
        values=values,
    )

    earliest = aggregator.earliest_overall()
    if earliest is not None:
        days = days_until(earliest.date, reference_day, aggregator.tz)
        diff.summary_text = format_countdown(days, earliest.fraction_name, locale)
    elif NEXT_PICKUP_SUMMARY in previous:
        diff.remove_summary = True

    for cap in diff.to_remove:
        logger.info(f"Removing capability {cap}: no data or disabled.")
    return diff
