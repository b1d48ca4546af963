"""
This module provides a factory for creating and configuring the application's core components.
"""

from waste_calendar.config import (ADDRESS_CODE, COUNTY_ID, DEVICE_NAME,
                                   HOUSE_NUMBER, STREET_NAME)
from waste_calendar.facade import WasteCollectionFacade
from waste_calendar.models import AddressSettings
from waste_calendar.services.calendar_service import CalendarService
from waste_calendar.services.refresh_service import RefreshService
from waste_calendar.services.widget_service import WidgetService

from .logging_config import setup_logging


def initialize_app() -> None:
    """
    Initializes the application by setting up logging.
    """
    setup_logging()


def create_facade(settings: dict = None) -> WasteCollectionFacade:
    """
    Initializes and returns the WasteCollectionFacade with all its dependencies.
    """
    address = AddressSettings(
        county_id=COUNTY_ID,
        street_name=STREET_NAME,
        address_code=ADDRESS_CODE,
        house_number=HOUSE_NUMBER,
    )
    calendar_service = CalendarService()
    refresh_service = RefreshService(calendar_service, address, settings=settings)
    widget_service = WidgetService(
        device_id=f"{STREET_NAME}{HOUSE_NUMBER}",
        device_name=DEVICE_NAME,
    )

    facade = WasteCollectionFacade(
        refresh_service=refresh_service,
        widget_service=widget_service,
    )
    return facade
