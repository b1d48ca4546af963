"""
This module contains configuration settings for the application.
"""
import os
import logging

# Renovasjon API
API_BASE_URL = os.environ.get("API_BASE_URL", "https://komteksky.norkart.no/MinRenovasjon.Api/api")
RENOVASJON_APP_KEY = os.environ.get("RENOVASJON_APP_KEY", "")
API_TIMEOUT = int(os.environ.get("API_TIMEOUT", 10))

# Tracked address
COUNTY_ID = os.environ.get("COUNTY_ID", "")
STREET_NAME = os.environ.get("STREET_NAME", "")
ADDRESS_CODE = os.environ.get("ADDRESS_CODE", "")
HOUSE_NUMBER = os.environ.get("HOUSE_NUMBER", "")
DEVICE_NAME = os.environ.get("DEVICE_NAME", f"Renovasjon {STREET_NAME} {HOUSE_NUMBER}".strip())

# Display
LOCALE = os.environ.get("LOCALE", "no")

# Daily refresh, wall-clock time in TIMEZONE
TIMEZONE = os.environ.get("TIMEZONE", "Europe/Oslo")
REFRESH_HOUR = int(os.environ.get("REFRESH_HOUR", 3))
REFRESH_MINUTE = int(os.environ.get("REFRESH_MINUTE", 0))

# Either "include_past" or "future_only"
REDUCTION_POLICY = os.environ.get("REDUCTION_POLICY", "include_past")

# Logging level
LOG_LEVEL = logging.INFO
LOG_DB_PATH = os.environ.get("LOG_DB_PATH")

# Widget endpoint
WIDGET_HOST = os.environ.get("WIDGET_HOST", "127.0.0.1")
WIDGET_PORT = int(os.environ.get("WIDGET_PORT", 5000))
