"""
This module defines the central facade for the waste calendar application.
"""

import logging
from typing import Dict, List, Mapping, Optional

from .exceptions import DownloadError, ParsingError
from .services.refresh_service import RefreshService
from .services.widget_service import WidgetService

logger = logging.getLogger(__name__)


class WasteCollectionFacade:
    """
    The central entry point for the waste calendar application.
    It orchestrates the services to perform high-level operations.
    """

    def __init__(self, refresh_service: RefreshService, widget_service: WidgetService):
        self.refresh_service = refresh_service
        self.widget_service = widget_service

    def refresh(self) -> bool:
        """
        Fetches the calendar and updates the exposed capabilities.

        Returns:
            True if the capabilities were updated, False otherwise. On failure
            the previous capabilities stay in place.
        """
        try:
            return self.refresh_service.refresh()
        except (DownloadError, ParsingError) as e:
            # Expected errors, e.g. the API being down or a malformed date
            logger.warning(f"Refresh failed, keeping previous pickup data: {e}")
            return False
        except Exception as e:
            logger.exception(f"An unexpected error occurred during refresh: {e}")
            return False

    def update_settings(self, new_settings: Mapping) -> bool:
        """Applies changed waste display settings."""
        try:
            self.refresh_service.update_settings(new_settings)
            return True
        except Exception as e:
            logger.exception(f"Failed to apply settings {dict(new_settings)}: {e}")
            return False

    def get_widget_data(self, device_id: Optional[str] = None, locale: Optional[str] = None) -> List[dict]:
        """Retrieves the widget payload, or [] for another device or on error."""
        if device_id and device_id != self.widget_service.device_id:
            logger.info(f"No device found with id {device_id}.")
            return []
        try:
            return self.widget_service.get_waste_data(
                self.refresh_service.capability_values(),
                locale or self.refresh_service.locale,
            )
        except Exception as e:
            logger.exception(f"Error getting waste data: {e}")
            return []

    def is_specific_waste(self, waste_type: str, when: str) -> bool:
        """Flow condition: is the given waste type picked up today/tomorrow?"""
        try:
            return self.refresh_service.is_specific_waste(waste_type, when)
        except Exception:
            logger.exception(f"Failed to evaluate pickup of {waste_type} {when}.")
            return False

    def get_waste_type_tomorrow(self) -> str:
        """Names of everything picked up tomorrow, e.g. "Restavfall og Papir"."""
        try:
            return self.refresh_service.waste_type_tomorrow()
        except Exception:
            logger.exception("Failed to determine tomorrow's waste types.")
            return ""

    def get_tomorrow_flags(self) -> Dict[str, bool]:
        """Per-category flags for tomorrow's pickup."""
        try:
            return self.refresh_service.tomorrow_flags()
        except Exception:
            logger.exception("Failed to determine tomorrow's pickup flags.")
            return {}
