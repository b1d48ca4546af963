"""
This module defines the data models for the waste calendar.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

NEXT_PICKUP_SUMMARY = "next_pickup_summary"


class WasteCategory(Enum):
    """The fixed set of waste categories, in display order."""

    GENERAL = "general"
    PAPER = "paper"
    GLASS = "glass"
    PLASTIC = "plastic"
    BIO = "bio"
    GARDEN = "garden"
    CLOTHES = "clothes"
    ELECTRICAL = "electrical"
    SPECIAL = "special"

    @property
    def capability_id(self) -> str:
        return f"waste_{self.value}"

    @classmethod
    def from_key(cls, key) -> Optional["WasteCategory"]:
        """Accepts a member, "general" or "waste_general"."""
        if isinstance(key, cls):
            return key
        if not isinstance(key, str):
            return None
        value = key[len("waste_"):] if key.startswith("waste_") else key
        try:
            return cls(value)
        except ValueError:
            return None


class ReductionPolicy(Enum):
    """Whether past dates take part in the per-fraction minimum."""

    INCLUDE_PAST = "include_past"
    FUTURE_ONLY = "future_only"


@dataclass(frozen=True)
class FractionDefinition:
    """A municipality-defined waste stream."""

    id: int
    name: str


@dataclass(frozen=True)
class CalendarEntry:
    """One raw feed record: a fraction and its pickup dates."""

    fraction_id: int
    pickup_dates: Tuple[str, ...]


@dataclass(frozen=True)
class AddressSettings:
    """Identifies the tracked address towards the calendar API."""

    county_id: str
    street_name: str
    address_code: str
    house_number: str


@dataclass(frozen=True)
class PickupEntry:
    """A category and the fraction name that is picked up for it."""

    category: WasteCategory
    fraction_name: str


@dataclass(frozen=True)
class EarliestPickup:
    """The next pickup across all enabled categories."""

    date: datetime
    category: WasteCategory
    fraction_name: str


@dataclass(frozen=True)
class ParsedCountdown:
    """Structured form of a countdown text such as "2 dager til Restavfall"."""

    days: int
    category_names: str
    display_text: str
    is_today: bool = False
    is_tomorrow: bool = False


@dataclass
class CapabilityDiff:
    """
    Instructions for bringing an exposed capability set up to date.

    Category capabilities are listed in to_add, to_remove and to_update. The
    summary capability is handled separately: when summary_text is set it has
    to be removed (if exposed) and added again after everything else.
    """

    previous: frozenset
    to_add: List[str] = field(default_factory=list)
    to_remove: List[str] = field(default_factory=list)
    to_update: List[str] = field(default_factory=list)
    values: Dict[str, str] = field(default_factory=dict)
    summary_text: Optional[str] = None
    remove_summary: bool = False

    @property
    def exposed(self) -> frozenset:
        """The capability set after applying this diff."""
        categories = (set(self.previous) - {NEXT_PICKUP_SUMMARY} - set(self.to_remove)) | set(self.to_add)
        if self.summary_text is not None:
            categories.add(NEXT_PICKUP_SUMMARY)
        return frozenset(categories)

    def instructions(self) -> List[Tuple[str, str, Optional[str]]]:
        """Ordered (action, capability_id, value) steps; the summary always comes last."""
        steps = [("remove", cap, None) for cap in self.to_remove]
        steps += [("add", cap, self.values[cap]) for cap in self.to_add]
        steps += [("update", cap, self.values[cap]) for cap in self.to_update]
        if NEXT_PICKUP_SUMMARY in self.previous and (
            self.summary_text is not None or self.remove_summary
        ):
            steps.append(("remove", NEXT_PICKUP_SUMMARY, None))
        if self.summary_text is not None:
            steps.append(("add", NEXT_PICKUP_SUMMARY, self.summary_text))
        return steps
