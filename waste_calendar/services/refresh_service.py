"""
This module defines the RefreshService, which owns the in-memory state of the
tracked address and runs the fetch -> reduce -> reconcile cycle.
"""
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Mapping, Optional

from ..aggregator import PickupAggregator
from ..calendar_reducer import ReducedCalendar, reduce_calendar
from ..capability_sync import reconcile
from ..config import LOCALE, REDUCTION_POLICY
from ..dates import get_timezone, start_of_day
from ..exceptions import DownloadError, ParsingError
from ..models import (AddressSettings, CapabilityDiff, FractionDefinition,
                      ReductionPolicy, WasteCategory)
from ..text_formatter import join_category_names
from .calendar_service import CalendarService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeviceState:
    """Everything known about the tracked address after the last refresh."""

    fractions: List[FractionDefinition] = field(default_factory=list)
    reduced: ReducedCalendar = field(default_factory=dict)
    settings: Dict = field(default_factory=dict)
    # Insertion order is display order; the summary is kept last
    capabilities: Dict[str, str] = field(default_factory=dict)


class RefreshService:
    """Keeps the exposed capabilities of one address in sync with the API."""

    def __init__(
        self,
        calendar_service: CalendarService,
        address: AddressSettings,
        settings: Optional[Mapping] = None,
        locale: str = LOCALE,
        policy: Optional[ReductionPolicy] = None,
        tz=None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.calendar_service = calendar_service
        self.address = address
        self.locale = locale
        self.policy = ReductionPolicy(policy or REDUCTION_POLICY)
        self.tz = get_timezone(tz)
        self.clock = clock or (lambda: datetime.now(self.tz))
        self.state = DeviceState(settings=dict(settings or {}))
        self._lock = threading.Lock()

    def refresh(self) -> bool:
        """
        Runs one refresh cycle.

        Only one cycle runs at a time; a call made while another is in flight
        is discarded. If anything fails the previous state is kept as is.

        Returns:
            True if the state was updated, False if the call was discarded or
            the calendar was empty.

        Raises:
            DownloadError: If the calendar cannot be fetched.
            ParsingError: If the calendar, or a date in it, cannot be parsed.
        """
        if not self._lock.acquire(blocking=False):
            logger.warning(
                f"Refresh for {self.address.street_name} {self.address.house_number} already running, discarding this one."
            )
            return False
        try:
            now = self.clock()
            fractions = self._fetch_fractions()
            entries = self.calendar_service.get_calendar(self.address)
            if not entries:
                logger.info("No calendar data found")
                return False

            reduced = reduce_calendar(entries, now, self.policy, self.tz)
            self._apply(fractions, reduced, self.state.settings, now)
            logger.info(f"Refreshed {len(reduced)} fractions, exposing {len(self.state.capabilities)} capabilities.")
            return True
        finally:
            self._lock.release()

    def update_settings(self, new_settings: Mapping) -> Optional[CapabilityDiff]:
        """
        Applies changed category settings to the exposed capabilities.

        Waits for a running refresh to finish. Returns the applied diff, or
        None when there is no calendar data yet.
        """
        with self._lock:
            settings = {**self.state.settings, **new_settings}
            if not self.state.reduced:
                self.state = DeviceState(self.state.fractions, self.state.reduced, settings, self.state.capabilities)
                return None
            return self._apply(self.state.fractions, self.state.reduced, settings, self.clock())

    def _fetch_fractions(self) -> List[FractionDefinition]:
        """Fetches the fraction list, falling back to the previous one."""
        try:
            fractions = self.calendar_service.get_fractions(self.address)
        except (DownloadError, ParsingError) as e:
            logger.warning(f"Could not fetch fractions, keeping the previous list: {e}")
            return self.state.fractions
        if not fractions:
            logger.info("No fractions found")
            return self.state.fractions
        return fractions

    def _apply(self, fractions, reduced, settings, now) -> CapabilityDiff:
        """Reconciles and swaps in the new state in one assignment."""
        diff = reconcile(
            self.state.capabilities.keys(), reduced, fractions, settings, now, self.locale, self.tz
        )
        capabilities = dict(self.state.capabilities)
        for action, capability, value in diff.instructions():
            if action == "remove":
                capabilities.pop(capability, None)
            else:
                capabilities[capability] = value

        self.state = DeviceState(list(fractions), dict(reduced), dict(settings), capabilities)
        return diff

    # --- Queries ---

    def aggregator(self) -> PickupAggregator:
        state = self.state
        return PickupAggregator(state.reduced, state.fractions, state.settings, self.tz)

    def _day(self, offset: int) -> datetime:
        return start_of_day(self.clock(), self.tz) + timedelta(days=offset)

    def waste_type_tomorrow(self) -> str:
        """Fraction names picked up tomorrow, joined for display; "" if none."""
        pickups = self.aggregator().categories_on(self._day(1))
        return join_category_names([pickup.fraction_name for pickup in pickups], self.locale)

    def tomorrow_flags(self) -> Dict[str, bool]:
        """Whether each category is picked up tomorrow."""
        pickups = self.aggregator().categories_on(self._day(1))
        tomorrow = {pickup.category for pickup in pickups}
        return {category.value: category in tomorrow for category in WasteCategory}

    def is_specific_waste(self, waste_type, when: str) -> bool:
        """Flow condition: is waste_type picked up "today" or "tomorrow"?"""
        category = WasteCategory.from_key(waste_type)
        if category is None:
            return False
        offsets = {"today": 0, "tomorrow": 1}
        if when not in offsets:
            return False
        return self.aggregator().is_picked_up_on(category, self._day(offsets[when]))

    def capability_values(self) -> Dict[str, str]:
        return dict(self.state.capabilities)
