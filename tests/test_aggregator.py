"""
Unit tests for the PickupAggregator.
"""
from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from waste_calendar.aggregator import (PickupAggregator, days_until,
                                       normalize_settings)
from waste_calendar.calendar_reducer import reduce_calendar
from waste_calendar.models import (CalendarEntry, FractionDefinition,
                                   PickupEntry, WasteCategory)

OSLO = ZoneInfo("Europe/Oslo")


def oslo(year, month, day, hour=0):
    return datetime(year, month, day, hour, tzinfo=OSLO)


@pytest.fixture
def fractions():
    return [
        FractionDefinition(1, "Restavfall"),
        FractionDefinition(2, "Papiravfall"),
        FractionDefinition(3, "Matavfall"),
        FractionDefinition(5, "Hageavfall"),
        FractionDefinition(8, "Storsekk"),
    ]


def test_next_date_and_days_until_for_single_fraction():
    entries = [CalendarEntry(1, ("2025-07-28", "2025-08-13"))]
    reduced = reduce_calendar(entries, date(2025, 7, 20), tz=OSLO)
    aggregator = PickupAggregator(reduced, [FractionDefinition(1, "Restavfall")], tz=OSLO)

    next_date = aggregator.next_date_for(WasteCategory.GENERAL)

    assert next_date == oslo(2025, 7, 28)
    assert days_until(next_date, date(2025, 7, 20), OSLO) == 8


def test_disabled_category_is_hidden_from_aggregates_only(fractions):
    reduced = {1: oslo(2025, 7, 30), 5: oslo(2025, 7, 21)}
    aggregator = PickupAggregator(reduced, fractions, {"garden": False}, tz=OSLO)

    assert aggregator.categories_on(date(2025, 7, 21)) == []
    assert aggregator.next_date_for(WasteCategory.GARDEN) == oslo(2025, 7, 21)
    assert aggregator.earliest_overall().category is WasteCategory.GENERAL
    assert not aggregator.is_enabled(WasteCategory.GARDEN)


def test_settings_accept_capability_ids(fractions):
    reduced = {5: oslo(2025, 7, 21)}
    aggregator = PickupAggregator(reduced, fractions, {"waste_garden": False}, tz=OSLO)
    assert aggregator.earliest_overall() is None


def test_earliest_overall_tie_break_uses_category_order():
    fractions = [FractionDefinition(2, "Papiravfall"), FractionDefinition(1, "Restavfall")]
    reduced = {1: oslo(2025, 7, 28), 2: oslo(2025, 7, 28)}
    aggregator = PickupAggregator(reduced, fractions, tz=OSLO)

    earliest = aggregator.earliest_overall()

    assert earliest.category is WasteCategory.GENERAL
    assert earliest.fraction_name == "Restavfall"
    assert set(aggregator.categories_on(date(2025, 7, 28))) == {
        PickupEntry(WasteCategory.GENERAL, "Restavfall"),
        PickupEntry(WasteCategory.PAPER, "Papiravfall"),
    }


def test_fractions_of_the_same_category_merge():
    fractions = [FractionDefinition(1, "Restavfall"), FractionDefinition(9, "Restavfall hytte")]
    reduced = {1: oslo(2025, 7, 30), 9: oslo(2025, 7, 25)}
    aggregator = PickupAggregator(reduced, fractions, tz=OSLO)

    assert aggregator.next_date_for(WasteCategory.GENERAL) == oslo(2025, 7, 25)
    assert aggregator.earliest_overall().fraction_name == "Restavfall hytte"
    assert aggregator.next_dates() == {WasteCategory.GENERAL: (oslo(2025, 7, 25), "Restavfall hytte")}


def test_unclassified_fractions_are_ignored(fractions):
    reduced = {8: oslo(2025, 7, 21), 3: oslo(2025, 7, 24)}
    aggregator = PickupAggregator(reduced, fractions, tz=OSLO)

    earliest = aggregator.earliest_overall()

    assert earliest.category is WasteCategory.BIO
    assert earliest.date == oslo(2025, 7, 24)
    assert aggregator.categories_on(date(2025, 7, 21)) == []


def test_fraction_missing_from_metadata_is_ignored():
    aggregator = PickupAggregator({99: oslo(2025, 7, 21)}, [], tz=OSLO)
    assert aggregator.earliest_overall() is None


def test_no_data_returns_none(fractions):
    aggregator = PickupAggregator({}, fractions, tz=OSLO)
    assert aggregator.next_date_for(WasteCategory.GENERAL) is None
    assert aggregator.earliest_overall() is None
    assert aggregator.categories_on(date(2025, 7, 21)) == []
    assert aggregator.next_dates() == {}


def test_categories_on_normalizes_target_to_midnight(fractions):
    reduced = {1: oslo(2025, 7, 28), 3: oslo(2025, 7, 29)}
    aggregator = PickupAggregator(reduced, fractions, tz=OSLO)

    pickups = aggregator.categories_on(oslo(2025, 7, 28, hour=18))

    assert pickups == [PickupEntry(WasteCategory.GENERAL, "Restavfall")]
    assert aggregator.is_picked_up_on(WasteCategory.GENERAL, date(2025, 7, 28))
    assert not aggregator.is_picked_up_on(WasteCategory.BIO, date(2025, 7, 28))


def test_categories_on_only_reports_the_next_pickup_of_a_category():
    fractions = [FractionDefinition(1, "Restavfall"), FractionDefinition(9, "Restavfall hytte")]
    reduced = {1: oslo(2025, 7, 25), 9: oslo(2025, 7, 28)}
    aggregator = PickupAggregator(reduced, fractions, tz=OSLO)

    assert aggregator.categories_on(date(2025, 7, 28)) == []


def test_days_until():
    assert days_until(oslo(2025, 7, 20), date(2025, 7, 20), OSLO) == 0
    assert days_until(oslo(2025, 7, 21), oslo(2025, 7, 20, hour=18), OSLO) == 1
    assert days_until(oslo(2025, 7, 18), date(2025, 7, 20), OSLO) == -2
    # A pickup later in the day rounds up
    assert days_until(oslo(2025, 7, 28, hour=10), date(2025, 7, 20), OSLO) == 9


def test_days_until_counts_calendar_days_across_dst_change():
    assert days_until(oslo(2025, 10, 27), date(2025, 10, 25), OSLO) == 2
    assert days_until(oslo(2025, 3, 31), date(2025, 3, 29), OSLO) == 2


def test_normalize_settings():
    settings = {"waste_paper": False, "glass": False, WasteCategory.BIO: True, "countyId": "3005"}
    assert normalize_settings(settings) == {
        WasteCategory.PAPER: False,
        WasteCategory.GLASS: False,
        WasteCategory.BIO: True,
    }
    assert normalize_settings(None) == {}


def test_days_until_accepts_plain_dates():
    assert days_until(date(2025, 7, 28), date(2025, 7, 20), OSLO) == 8
    assert days_until(date(2025, 7, 20), oslo(2025, 7, 20, hour=18), OSLO) == 0
    assert days_until(date(2025, 10, 27), date(2025, 10, 25), OSLO) == 2
