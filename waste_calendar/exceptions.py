"""
This module defines custom exceptions for the waste calendar.
"""


class DownloadError(Exception):
    """Custom exception for errors while fetching the calendar or fractions."""

    pass


class ParsingError(Exception):
    """Custom exception for feed payloads that do not have the expected shape."""

    pass


class MalformedDateError(ParsingError):
    """Raised when a pickup date in the feed cannot be parsed."""

    def __init__(self, value, fraction_id=None):
        self.value = value
        self.fraction_id = fraction_id
        super().__init__(f"Unparsable pickup date {value!r} for fraction {fraction_id}")


class UnknownLocaleError(ValueError):
    """Raised when text is requested in a locale without a string table."""

    pass
