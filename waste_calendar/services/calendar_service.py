"""
This module defines the CalendarService for fetching the pickup calendar and
fraction list from the Min Renovasjon API.
"""
import logging
from typing import List

import requests

from ..calendar_reducer import parse_feed, parse_fractions
from ..config import API_BASE_URL, API_TIMEOUT, RENOVASJON_APP_KEY
from ..exceptions import DownloadError, ParsingError
from ..models import AddressSettings, CalendarEntry, FractionDefinition

# Get a logger instance for this module
logger = logging.getLogger(__name__)


class CalendarService:
    """Handles downloading of the waste calendar and fraction metadata."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        app_key: str = RENOVASJON_APP_KEY,
        timeout: int = API_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.app_key = app_key
        self.timeout = timeout

    def get_calendar(self, address: AddressSettings) -> List[CalendarEntry]:
        """
        Downloads the pickup calendar for an address.

        Args:
            address: The tracked address.

        Returns:
            A list of CalendarEntry objects, possibly empty.

        Raises:
            DownloadError: If the request fails or the API does not answer 200.
            ParsingError: If the response is not a calendar.
        """
        params = {
            "kommunenr": address.county_id,
            "gatenavn": address.street_name,
            "gatekode": address.address_code,
            "husnr": address.house_number,
        }
        payload = self._get_json("tommekalender", address, params)
        entries = parse_feed(payload)
        logger.info(f"Fetched {len(entries)} calendar entries for {address.street_name} {address.house_number}.")
        return entries

    def get_fractions(self, address: AddressSettings) -> List[FractionDefinition]:
        """
        Downloads the fraction list for the address' municipality.

        Raises:
            DownloadError: If the request fails or the API does not answer 200.
            ParsingError: If the response is not a fraction list.
        """
        payload = self._get_json("fraksjoner", address)
        fractions = parse_fractions(payload)
        logger.info(f"Fetched {len(fractions)} fractions for county {address.county_id}.")
        return fractions

    def _get_json(self, endpoint: str, address: AddressSettings, params: dict = None):
        """Performs a GET against the API and decodes the JSON body."""
        url = f"{self.base_url}/{endpoint}"
        headers = {
            "Kommunenr": str(address.county_id),
            "RenovasjonAppKey": self.app_key,
        }
        try:
            response = requests.get(url, params=params, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise DownloadError(f"Error fetching {endpoint} for county {address.county_id}: {e}") from e

        if response.status_code != 200:
            raise DownloadError(f"Unexpected status {response.status_code} from {endpoint}")

        try:
            return response.json()
        except ValueError as e:
            raise ParsingError(f"Failed to parse JSON from {endpoint}: {e}") from e
