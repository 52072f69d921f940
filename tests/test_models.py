"""Construction-time validation of catalog rules."""
import math
from datetime import date

import pytest

from treat_pricing.engine.models import (
    BulkPricing,
    CatalogValidationError,
    DayOfWeek,
    Item,
    MonthAndDay,
    PercentageOff,
    QuantityForFixedPrice,
)


@pytest.mark.parametrize("percent", [0, 25, 100, 12.5])
def test_percentage_off_accepts_range(percent):
    assert PercentageOff(percent).percent == percent


@pytest.mark.parametrize("percent", [101, -1, 100.5, True, "25"])
def test_percentage_off_rejects_out_of_range(percent):
    with pytest.raises(CatalogValidationError):
        PercentageOff(percent)


def test_percentage_error_is_value_error():
    with pytest.raises(ValueError, match="between 0 and 100"):
        PercentageOff(101)


@pytest.mark.parametrize("amount", [0, -4, 2.5])
def test_bulk_pricing_requires_positive_amount(amount):
    with pytest.raises(CatalogValidationError):
        BulkPricing(amount, 7.0)


def test_bundle_prices_must_be_non_negative():
    with pytest.raises(CatalogValidationError):
        BulkPricing(4, -1.0)
    with pytest.raises(CatalogValidationError):
        QuantityForFixedPrice(8, -6.0)
    with pytest.raises(CatalogValidationError):
        QuantityForFixedPrice(0, 6.0)


def test_item_validation():
    with pytest.raises(CatalogValidationError):
        Item(id=1, name="Brownie", price=-2.0)
    with pytest.raises(CatalogValidationError):
        Item(id=1, name="", price=2.0)


@pytest.mark.parametrize("name, expected", [
    ("Mon", 0), ("friday", 4), ("FRI", 4), ("Sunday", 6), (" tue ", 1),
])
def test_day_of_week_from_name(name, expected):
    assert DayOfWeek.from_name(name).weekday == expected


def test_day_of_week_rejects_unknown():
    with pytest.raises(CatalogValidationError):
        DayOfWeek.from_name("Funday")
    with pytest.raises(CatalogValidationError):
        DayOfWeek(7)


def test_month_and_day_bounds():
    with pytest.raises(CatalogValidationError):
        MonthAndDay(13, 1)
    with pytest.raises(CatalogValidationError):
        MonthAndDay(10, 0)
    assert MonthAndDay(2, 29).matches(date(2024, 2, 29))
    assert not MonthAndDay(2, 29).matches(date(2024, 3, 1))


def test_recurrence_descriptions():
    assert DayOfWeek(4).describe() == "every Friday"
    assert MonthAndDay(10, 1).describe() == "every October 1"


@pytest.mark.parametrize("amount", [math.nan, math.inf, -math.inf])
def test_amounts_must_be_finite(amount):
    with pytest.raises(CatalogValidationError, match="finite"):
        Item(id=1, name="Cookie", price=amount)
    with pytest.raises(CatalogValidationError, match="finite"):
        BulkPricing(6, amount)
    with pytest.raises(CatalogValidationError, match="finite"):
        QuantityForFixedPrice(8, amount)


def test_percentage_off_rejects_nan():
    with pytest.raises(CatalogValidationError):
        PercentageOff(math.nan)
