"""
Unit tests for the countdown and label formatting.
"""
from datetime import date

import pytest

from waste_calendar.exceptions import UnknownLocaleError
from waste_calendar.locales import resolve_locale
from waste_calendar.models import WasteCategory
from waste_calendar.text_formatter import (category_title, format_countdown,
                                           format_pickup_date,
                                           join_category_names,
                                           parse_countdown,
                                           split_category_names)


def test_format_countdown_numeric_form():
    assert format_countdown(5, "Restavfall", "no") == "5 dager til Restavfall"
    assert format_countdown(5, "General waste", "en") == "5 days until General waste"


def test_format_countdown_today_and_tomorrow():
    assert format_countdown(0, "Restavfall", "no") == "I dag: Restavfall"
    assert format_countdown(1, "Restavfall", "no") == "I morgen: Restavfall"
    assert format_countdown(1, "Paper waste", "en") == "Tomorrow: Paper waste"


def test_parse_countdown_round_trip():
    parsed = parse_countdown(format_countdown(5, "Restavfall", "no"))
    assert parsed.days == 5
    assert parsed.category_names == "Restavfall"
    assert parsed.display_text == "5 dager til"
    assert not parsed.is_today and not parsed.is_tomorrow


@pytest.mark.parametrize("locale", ["no", "en"])
def test_parse_countdown_round_trip_keeps_days(locale):
    for days in (2, 3, 14, 45):
        assert parse_countdown(format_countdown(days, "Glass/Metall", locale)).days == days


def test_parse_countdown_today_and_tomorrow():
    today = parse_countdown("I dag: Matavfall")
    assert today.days == 0
    assert today.is_today
    assert today.category_names == "Matavfall"
    assert today.display_text == "I dag"

    tomorrow = parse_countdown("Tomorrow: Food waste")
    assert tomorrow.days == 1
    assert tomorrow.is_tomorrow
    assert tomorrow.display_text == "Tomorrow"


def test_parse_countdown_other_language_and_singular():
    parsed = parse_countdown("2 days until General waste", locale="no")
    assert parsed.days == 2
    assert parsed.category_names == "General waste"
    assert parsed.display_text == "2 dager til"

    assert parse_countdown("1 dag til Papir").days == 1


def test_parse_countdown_keeps_joined_names_unmodified():
    parsed = parse_countdown("3 dager til Restavfall og Papir")
    assert parsed.category_names == "Restavfall og Papir"


def test_parse_countdown_rejects_other_text():
    assert parse_countdown("Ingen tømming") is None
    assert parse_countdown("") is None
    assert parse_countdown(None) is None


def test_join_category_names():
    assert join_category_names(["A", "B", "C"], "no") == "A, B og C"
    assert join_category_names(["A", "B"], "no") == "A og B"
    assert join_category_names(["A", "B"], "en") == "A and B"
    assert join_category_names(["A"], "no") == "A"
    assert join_category_names([], "no") == ""


def test_split_category_names():
    assert split_category_names("Restavfall, Papir og Plast") == ["Restavfall", "Papir", "Plast"]
    assert split_category_names("General waste and Paper waste", "en") == ["General waste", "Paper waste"]
    assert split_category_names("Restavfall") == ["Restavfall"]


def test_format_pickup_date():
    assert format_pickup_date(date(2025, 7, 28), "no") == "man. 28. jul."
    assert format_pickup_date(date(2025, 7, 28), "en") == "Mon, Jul 28"


def test_locales():
    assert resolve_locale("nb-NO") == "no"
    assert resolve_locale("en_GB") == "en"
    assert resolve_locale(None) == "no"
    assert category_title(WasteCategory.GENERAL, "en") == "General waste"
    with pytest.raises(UnknownLocaleError):
        format_countdown(3, "Restavfall", "de")
