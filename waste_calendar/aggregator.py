"""
This module derives per-category pickup facts from a reduced calendar.
"""
import math
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .calendar_reducer import ReducedCalendar
from .classifier import classify_fraction
from .dates import DayLike, get_timezone, localize, start_of_day
from .models import EarliestPickup, FractionDefinition, PickupEntry, WasteCategory


def normalize_settings(settings: Optional[Mapping]) -> Dict[WasteCategory, bool]:
    """
    Maps host settings onto categories.

    Keys may be WasteCategory members, "general" or "waste_general". Keys that
    are not categories are ignored.
    """
    normalized = {}
    for key, value in (settings or {}).items():
        category = WasteCategory.from_key(key)
        if category is not None:
            normalized[category] = value
    return normalized


def days_until(pickup: DayLike, reference_day: DayLike, tz=None) -> int:
    """
    Whole days from the reference day's midnight to the pickup, rounded up.

    Zero means today, a negative value means the pickup is overdue.
    """
    zone = get_timezone(tz)
    if isinstance(pickup, datetime):
        pickup = localize(pickup, zone)
    else:
        pickup = start_of_day(pickup, zone)
    delta = pickup - start_of_day(reference_day, zone)
    return math.ceil(delta.total_seconds() / 86400)


class PickupAggregator:
    """
    Answers next-pickup questions for a reduced calendar.

    Disabled categories are left out of earliest_overall() and categories_on(),
    but next_date_for() still answers for them.
    """

    def __init__(
        self,
        reduced: ReducedCalendar,
        fractions: Iterable[FractionDefinition],
        settings: Optional[Mapping] = None,
        tz=None,
    ):
        self.tz = get_timezone(tz)
        self.reduced = dict(reduced)
        self.fractions = list(fractions)
        self.settings = normalize_settings(settings)
        self._by_category = self._group_by_category()

    def _group_by_category(self) -> Dict[WasteCategory, List[Tuple[datetime, FractionDefinition]]]:
        grouped: Dict[WasteCategory, List[Tuple[datetime, FractionDefinition]]] = {}
        seen = set()
        for fraction in self.fractions:
            if fraction.id in seen or fraction.id not in self.reduced:
                continue
            seen.add(fraction.id)
            category = classify_fraction(fraction)
            if category is None:
                continue
            grouped.setdefault(category, []).append((self.reduced[fraction.id], fraction))
        return grouped

    def is_enabled(self, category: WasteCategory) -> bool:
        return self.settings.get(category) is not False

    def _next(self, category: WasteCategory) -> Optional[Tuple[datetime, FractionDefinition]]:
        candidates = self._by_category.get(category)
        if not candidates:
            return None
        # min() keeps the first fraction on ties, i.e. feed order
        return min(candidates, key=lambda item: item[0])

    def next_date_for(self, category: WasteCategory) -> Optional[datetime]:
        """Returns the category's next pickup date, or None without data."""
        found = self._next(category)
        return found[0] if found else None

    def next_dates(self) -> Dict[WasteCategory, Tuple[datetime, str]]:
        """Returns (date, fraction name) for every category with data, in category order."""
        result = {}
        for category in WasteCategory:
            found = self._next(category)
            if found:
                result[category] = (found[0], found[1].name)
        return result

    def earliest_overall(self) -> Optional[EarliestPickup]:
        """
        Returns the earliest pickup across enabled categories.

        When several categories share the earliest date, the one listed first
        in WasteCategory is reported.
        """
        earliest = None
        for category in WasteCategory:
            if not self.is_enabled(category):
                continue
            found = self._next(category)
            if found is None:
                continue
            if earliest is None or found[0] < earliest.date:
                earliest = EarliestPickup(date=found[0], category=category, fraction_name=found[1].name)
        return earliest

    def categories_on(self, target_day: DayLike) -> List[PickupEntry]:
        """Lists the enabled categories whose next pickup falls on target_day."""
        target = start_of_day(target_day, self.tz)
        pickups = []
        for category in WasteCategory:
            if not self.is_enabled(category):
                continue
            next_date = self.next_date_for(category)
            if next_date is None or start_of_day(next_date, self.tz) != target:
                continue
            for pickup, fraction in self._by_category[category]:
                entry = PickupEntry(category=category, fraction_name=fraction.name)
                if start_of_day(pickup, self.tz) == target and entry not in pickups:
                    pickups.append(entry)
        return pickups

    def is_picked_up_on(self, category: WasteCategory, target_day: DayLike) -> bool:
        return any(entry.category is category for entry in self.categories_on(target_day))
