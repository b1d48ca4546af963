"""
String tables for the supported display languages.

The engine only ever looks strings up through translate(); adding a language
means adding a table here.
"""
from typing import Dict

from .exceptions import UnknownLocaleError

DEFAULT_LOCALE = "no"

STRINGS: Dict[str, Dict] = {
    "no": {
        "pickup.today": "I dag",
        "pickup.tomorrow": "I morgen",
        "pickup.days_to": "dager til",
        "pickup.day_to": "dag til",
        "countdown.today": "I dag: {name}",
        "countdown.tomorrow": "I morgen: {name}",
        "and": "og",
        "date_format": "{weekday} {day}. {month}",
        "weekdays": ("man.", "tir.", "ons.", "tor.", "fre.", "lør.", "søn."),
        "months": ("jan.", "feb.", "mar.", "apr.", "mai", "jun.", "jul.", "aug.", "sep.", "okt.", "nov.", "des."),
        "titles": {
            "general": "Restavfall",
            "paper": "Papir",
            "glass": "Glass/Metall",
            "plastic": "Plast",
            "bio": "Matavfall",
            "garden": "Hageavfall",
            "clothes": "Tekstil",
            "electrical": "Elektrisk",
            "special": "Spesialavfall",
        },
    },
    "en": {
        "pickup.today": "Today",
        "pickup.tomorrow": "Tomorrow",
        "pickup.days_to": "days until",
        "pickup.day_to": "day until",
        "countdown.today": "Today: {name}",
        "countdown.tomorrow": "Tomorrow: {name}",
        "and": "and",
        "date_format": "{weekday}, {month} {day}",
        "weekdays": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
        "months": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
        "titles": {
            "general": "General waste",
            "paper": "Paper waste",
            "glass": "Glass/Metal",
            "plastic": "Plastic",
            "bio": "Food waste",
            "garden": "Garden waste",
            "clothes": "Clothes",
            "electrical": "Electrical",
            "special": "Special waste",
        },
    },
}

# Norwegian Bokmål and Nynorsk share the "no" table
ALIASES = {"nb": "no", "nn": "no"}


def resolve_locale(locale) -> str:
    """
    Maps "no", "nb-NO", "en_GB" and similar onto a table key.

    Raises:
        UnknownLocaleError: If there is no table for the language.
    """
    if not locale:
        return DEFAULT_LOCALE
    language = str(locale).replace("_", "-").split("-")[0].lower()
    language = ALIASES.get(language, language)
    if language not in STRINGS:
        raise UnknownLocaleError(f"No strings for locale '{locale}'")
    return language


def translate(key: str, locale=None):
    """Looks up a string (or table) for a locale."""
    return STRINGS[resolve_locale(locale)][key]
