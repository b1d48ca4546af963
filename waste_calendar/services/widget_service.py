"""
This module builds the payload for the pickup calendar widget.
"""
import logging
from typing import Any, Dict, List, Mapping

from thefuzz import process

from ..classifier import classify
from ..exceptions import UnknownLocaleError
from ..locales import DEFAULT_LOCALE, resolve_locale
from ..models import NEXT_PICKUP_SUMMARY, WasteCategory
from ..text_formatter import category_title, parse_countdown, split_category_names

# Get a logger instance for this module
logger = logging.getLogger(__name__)

FUZZY_SCORE_CUTOFF = 80


class WidgetService:
    """Turns exposed capabilities into the data the widget displays."""

    def __init__(self, device_id: str, device_name: str):
        self.device_id = device_id
        self.device_name = device_name

    def get_waste_data(self, capabilities: Mapping[str, str], locale=None) -> List[Dict[str, Any]]:
        """
        Builds the widget payload.

        Args:
            capabilities: Exposed capability values, in display order.
            locale: Language of titles and the countdown display text.

        Returns:
            A one-element list describing the device, or an empty list when
            nothing is exposed.
        """
        locale = self._resolve_locale(locale)
        waste_capabilities = []
        for capability_id, value in capabilities.items():
            category = WasteCategory.from_key(capability_id)
            if category is None or not value:
                continue
            waste_capabilities.append(
                {
                    "id": capability_id,
                    "title": category_title(category, locale),
                    "value": value,
                    "icon": f"{capability_id}.png",
                }
            )

        next_pickup_days = capabilities.get(NEXT_PICKUP_SUMMARY)
        if not waste_capabilities and not next_pickup_days:
            return []

        next_pickup_info = None
        if next_pickup_days:
            parsed = parse_countdown(next_pickup_days, locale)
            if parsed:
                next_pickup_info = {
                    "days": parsed.days,
                    "displayText": parsed.display_text,
                    "wasteTypes": parsed.category_names,
                    "isToday": parsed.is_today,
                    "isTomorrow": parsed.is_tomorrow,
                    "matchingWasteCapabilities": find_matching_capabilities(
                        parsed.category_names, waste_capabilities
                    ),
                }
            else:
                logger.warning(f"Could not parse next pickup text '{next_pickup_days}'.")

        return [
            {
                "deviceId": self.device_id,
                "deviceName": self.device_name,
                "wasteCapabilities": waste_capabilities,
                "nextPickupDays": next_pickup_days,
                "nextPickupInfo": next_pickup_info,
            }
        ]

    def _resolve_locale(self, locale) -> str:
        try:
            return resolve_locale(locale)
        except UnknownLocaleError:
            logger.warning(f"Unknown locale {locale!r}, using {DEFAULT_LOCALE}.")
            return DEFAULT_LOCALE


def find_matching_capabilities(waste_types_text: str, waste_capabilities: List[dict]) -> List[dict]:
    """
    Finds the widget capabilities named in a countdown's category phrase.

    Each name is matched by substring against the capability titles first,
    then by classifying it as a fraction name, and finally by fuzzy matching.
    """
    matches = []
    titles = {capability["title"]: capability for capability in waste_capabilities}

    for name in split_category_names(waste_types_text):
        found = _substring_match(name, waste_capabilities)

        if found is None:
            category = classify(name)
            if category is not None:
                found = next(
                    (c for c in waste_capabilities if c["id"] == category.capability_id), None
                )

        if found is None and titles:
            best = process.extractOne(name, list(titles), score_cutoff=FUZZY_SCORE_CUTOFF)
            if best:
                found = titles[best[0]]

        if found is not None and found not in matches:
            matches.append(found)
    return matches


def _substring_match(name: str, waste_capabilities: List[dict]):
    name_lower = name.lower()
    for capability in waste_capabilities:
        title = capability["title"].lower()
        if title in name_lower or name_lower in title:
            return capability
    return None
