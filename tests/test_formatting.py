from datetime import timedelta

import pytest

from unitconv.models import units as u
from unitconv.services.formatting import (
    data_age,
    describe,
    format_preset,
    format_result,
    rate_info,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (2_500_000, "2.50e+06"),
        (1_000_000, "1.00e+06"),
        (999_999.4, "999999"),
        (1000, "1000"),
        (12.346, "12.35"),
        (1, "1.00"),
        (0.5, "0.5000"),
        (0.00012, "0.0001"),
        (0, "0.0000"),
        (-2000.4, "-2000"),
    ],
)
def test_format_result_thresholds(value, expected):
    assert format_result(value) == expected


def test_format_result_without_value():
    assert format_result(None) == ""
    assert format_result(float("nan")) == ""


@pytest.mark.parametrize(
    "value,expected", [(1, "1"), (10.0, "10"), (2.5, "2.5"), (1500.7, "1501")]
)
def test_format_preset(value, expected):
    assert format_preset(value) == expected


def test_describe():
    assert describe(1, u.KILOGRAM, 1000, u.GRAM) == "1.00 kg = 1000 g"


def test_rate_info_linear_and_currency():
    assert rate_info(u.METER, u.FOOT) == "1 m = 3.2808 ft"
    assert rate_info(u.KES, u.USD, {"USD": 0.0077}) == "1 KES = 0.0077 USD"


def test_rate_info_temperature_reference_points():
    assert rate_info(u.CELSIUS, u.FAHRENHEIT) == "0°C = 32°F | 100°C = 212°F"
    assert rate_info(u.KELVIN, u.KELVIN) == "Temperature conversion"


@pytest.mark.parametrize(
    "age,expected",
    [
        (None, "No data"),
        (timedelta(minutes=7, seconds=30), "7m ago"),
        (timedelta(hours=2, minutes=5), "2h 5m ago"),
        (timedelta(seconds=-5), "0m ago"),
    ],
)
def test_data_age(age, expected):
    assert data_age(age) == expected
