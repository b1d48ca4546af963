"""
This module turns pickup facts into display strings and parses them back.
"""
import re
from datetime import date
from typing import Iterable, List, Optional

from .locales import STRINGS, resolve_locale, translate
from .models import ParsedCountdown, WasteCategory


def _phrase_pattern(phrase: str) -> str:
    return r"\s+".join(re.escape(word) for word in phrase.split())


def _template_pattern(template: str) -> "re.Pattern":
    before, after = template.split("{name}")
    return re.compile(
        rf"^\s*{_phrase_pattern(before)}\s*(?P<name>.+?){_phrase_pattern(after)}\s*$",
        re.IGNORECASE,
    )


def _numeric_pattern(locale: str) -> "re.Pattern":
    plural = _phrase_pattern(translate("pickup.days_to", locale))
    singular = _phrase_pattern(translate("pickup.day_to", locale))
    return re.compile(
        rf"^\s*(?P<days>-?\d+)\s+(?:{plural}|{singular})\s+(?P<name>.+?)\s*$",
        re.IGNORECASE,
    )


def format_countdown(days: int, category_name: str, locale=None) -> str:
    """
    Formats the countdown to the next pickup.

    Returns e.g. "I dag: Restavfall", "I morgen: Restavfall" or
    "5 dager til Restavfall".
    """
    if days == 0:
        return translate("countdown.today", locale).format(name=category_name)
    if days == 1:
        return translate("countdown.tomorrow", locale).format(name=category_name)
    phrase = translate("pickup.day_to" if abs(days) == 1 else "pickup.days_to", locale)
    return f"{days} {phrase} {category_name}"


def countdown_display_text(days: int, locale=None) -> str:
    """The countdown without the category part, as shown by the widget."""
    if days == 0:
        return translate("pickup.today", locale)
    if days == 1:
        return translate("pickup.tomorrow", locale)
    return f"{days} {translate('pickup.days_to', locale)}"


def parse_countdown(text: str, locale=None) -> Optional[ParsedCountdown]:
    """
    Parses a countdown text in any supported language.

    Args:
        text: A string produced by format_countdown().
        locale: Language of the returned display_text. Defaults to the
            language the text was written in; also tried first when matching.

    Returns:
        A ParsedCountdown, or None if the text is not a countdown.
    """
    if not text:
        return None

    candidates = list(STRINGS)
    if locale:
        preferred = resolve_locale(locale)
        candidates.remove(preferred)
        candidates.insert(0, preferred)

    for candidate in candidates:
        days = None
        match = _numeric_pattern(candidate).match(text)
        if match:
            days = int(match.group("days"))
        else:
            for offset, key in ((0, "countdown.today"), (1, "countdown.tomorrow")):
                match = _template_pattern(translate(key, candidate)).match(text)
                if match:
                    days = offset
                    break
        if days is None:
            continue

        display_locale = locale or candidate
        return ParsedCountdown(
            days=days,
            category_names=match.group("name"),
            display_text=countdown_display_text(days, display_locale),
            is_today=days == 0,
            is_tomorrow=days == 1,
        )
    return None


def join_category_names(names: Iterable[str], locale=None) -> str:
    """Joins names as "A", "A og B" or "A, B og C"."""
    names = list(names)
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])} {translate('and', locale)} {names[-1]}"


def split_category_names(text: str, locale=None) -> List[str]:
    """Splits a joined name list back into names."""
    if locale:
        conjunctions = [translate("and", locale)]
    else:
        conjunctions = [table["and"] for table in STRINGS.values()]
    words = "|".join(re.escape(word) for word in conjunctions)
    parts = re.split(rf"\s+(?:{words})\s+|\s*,\s*", text or "")
    return [part.strip() for part in parts if part.strip()]


def format_pickup_date(value: date, locale=None) -> str:
    """Short weekday, day and month, e.g. "man. 28. jul." or "Mon, Jul 28"."""
    return translate("date_format", locale).format(
        weekday=translate("weekdays", locale)[value.weekday()],
        day=value.day,
        month=translate("months", locale)[value.month - 1],
    )


def category_title(category: WasteCategory, locale=None) -> str:
    return translate("titles", locale)[category.value]
