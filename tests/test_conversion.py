from __future__ import annotations

import math

import pytest

from unitconv.models import units as u
from unitconv.models.conversion import ConversionRequest
from unitconv.services.conversion import (
    below_absolute_zero,
    conversion_rate,
    convert,
    parse_value,
    swap,
    temperature_context,
)

LINEAR_PAIRS = [
    (u.KILOGRAM, u.POUND),
    (u.OUNCE, u.STONE),
    (u.TON, u.GRAM),
    (u.METER, u.FOOT),
    (u.MILE, u.KILOMETER),
    (u.INCH, u.CENTIMETER),
]
TEMPERATURE_PAIRS = [
    (u.CELSIUS, u.FAHRENHEIT),
    (u.FAHRENHEIT, u.KELVIN),
    (u.KELVIN, u.CELSIUS),
]


@pytest.mark.parametrize("unit", u.UNITS, ids=lambda unit: unit.id)
@pytest.mark.parametrize("value", [0, 1, 12.5, 98765.4321])
def test_identity_conversion(unit, value):
    assert convert(value, unit, unit) == value


@pytest.mark.parametrize("a,b", LINEAR_PAIRS + TEMPERATURE_PAIRS)
def test_round_trip(a, b):
    for value in (0.5, 3, 250):
        there = convert(value, a, b)
        assert there is not None
        assert convert(there, b, a) == pytest.approx(value, rel=1e-9, abs=1e-9)


def test_temperature_fixed_points():
    assert convert(0, u.CELSIUS, u.FAHRENHEIT) == 32
    assert convert(100, u.CELSIUS, u.FAHRENHEIT) == 212
    assert convert(0, u.CELSIUS, u.KELVIN) == 273.15
    assert convert(212, u.FAHRENHEIT, u.CELSIUS) == pytest.approx(100)
    assert convert(373.15, u.KELVIN, u.FAHRENHEIT) == pytest.approx(212)


def test_negative_temperatures_convert():
    assert convert(-40, u.CELSIUS, u.FAHRENHEIT) == pytest.approx(-40)
    assert convert("-10", u.FAHRENHEIT, u.CELSIUS) == pytest.approx(-23.3333, abs=1e-4)


def test_below_absolute_zero_has_no_result():
    assert convert(-1, u.KELVIN, u.CELSIUS) is None
    assert convert(-300, u.CELSIUS, u.KELVIN) is None
    assert below_absolute_zero(-1, u.KELVIN)
    assert below_absolute_zero("-500", u.FAHRENHEIT)
    assert not below_absolute_zero(0, u.KELVIN)
    assert not below_absolute_zero(-5, u.METER)


def test_weight_and_length():
    assert convert(1, u.KILOGRAM, u.GRAM) == 1000
    assert convert(1, u.METER, u.FOOT) == pytest.approx(3.28084, abs=1e-3)
    assert convert("2.5", u.KILOMETER, u.METER) == pytest.approx(2500)
    assert convert(14, u.POUND, u.STONE) == pytest.approx(1.0, rel=1e-3)


@pytest.mark.parametrize(
    "bad", [-1, "-3", "", "   ", "abc", "1.2.3", None, float("nan"), float("inf"), "inf", True]
)
def test_invalid_input_has_no_result(bad):
    result = convert(bad, u.KILOGRAM, u.GRAM)
    assert result is None


def test_invalid_input_never_yields_nan():
    for bad in ("nan", float("-inf"), "NaN"):
        for a, b in LINEAR_PAIRS + TEMPERATURE_PAIRS:
            result = convert(bad, a, b)
            assert result is None or not math.isnan(result)


def test_parse_value():
    assert parse_value(" 42 ") == 42.0
    assert parse_value("1e3") == 1000.0
    assert parse_value("-2") is None
    assert parse_value("-2", allow_negative=True) == -2.0
    assert parse_value(object()) is None


def test_cross_category_has_no_result():
    assert convert(1, u.KILOGRAM, u.METER) is None
    assert convert(1, u.CELSIUS, u.USD) is None


class TestCurrency:
    rates = {"KES": 1.0, "USD": 0.008, "EUR": 0.0064, "GBP": 0.005}

    def test_from_base_uses_rate_directly(self):
        assert convert(1000, u.KES, u.USD, self.rates) == pytest.approx(8.0)

    def test_to_base_divides_by_rate(self):
        assert convert(8, u.USD, u.KES, self.rates) == pytest.approx(1000)

    def test_non_base_pair_pivots_through_kes(self):
        # 10 USD -> 1250 KES -> 8 EUR
        assert convert(10, u.USD, u.EUR, self.rates) == pytest.approx(8.0)

    def test_missing_code_uses_static_factor(self):
        # JPY absent from the table: static factor 1.0 per KES
        assert convert(100, u.KES, u.JPY, self.rates) == pytest.approx(100.0)
        assert convert(1, u.GBP, u.CAD, self.rates) == pytest.approx(200 * 0.009)

    def test_without_snapshot_uses_static_factors(self):
        assert convert(1000, u.KES, u.USD) == pytest.approx(7.0)

    def test_round_trip_with_same_snapshot(self):
        there = convert(123.45, u.EUR, u.GBP, self.rates)
        assert convert(there, u.GBP, u.EUR, self.rates) == pytest.approx(123.45)


def test_swap_rederives_from_input():
    request = ConversionRequest("5", u.KILOGRAM, u.POUND)
    swapped = swap(request)
    assert swapped.request.from_unit is u.POUND
    assert swapped.request.to_unit is u.KILOGRAM
    assert swapped.value == pytest.approx(5 * 453.592 / 1000)
    assert swap(swapped.request).value == pytest.approx(5 * 1000 / 453.592)


def test_conversion_rate():
    assert conversion_rate(u.METER, u.CENTIMETER) == pytest.approx(100)
    assert conversion_rate(u.CELSIUS, u.FAHRENHEIT) is None
    assert conversion_rate(u.USD, u.KES, {"USD": 0.01}) == pytest.approx(100)


@pytest.mark.parametrize(
    "celsius,label",
    [
        (-50, "Extremely cold"),
        (-5, "Freezing"),
        (5, "Cold"),
        (15, "Cool"),
        (25, "Comfortable"),
        (35, "Hot"),
        (45, "Extremely hot"),
    ],
)
def test_temperature_context(celsius, label):
    assert temperature_context(celsius) == label
