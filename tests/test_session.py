from __future__ import annotations

import asyncio

import pytest

from unitconv.models import units as u
from unitconv.models.constants import Category
from unitconv.services.session import ConverterSession


def test_defaults_follow_category():
    session = ConverterSession(Category.LENGTH)
    assert (session.from_unit, session.to_unit) == (u.METER, u.FOOT)
    assert session.title == "Length Converter"
    assert session.subtitle == "Convert Meters to Feet"
    assert session.show_result is False
    assert session.available_units == [u.METER, u.CENTIMETER, u.KILOMETER, u.FOOT, u.INCH, u.MILE]


def test_input_and_unit_changes_recompute():
    session = ConverterSession(Category.WEIGHT)
    assert session.set_input("2") == 2000
    assert session.description == "2 kg = 2000 g"
    assert session.rate_info == "1 kg = 1000.0000 g"

    session.set_to_unit(u.POUND)
    assert session.result == pytest.approx(4.40925, rel=1e-5)

    session.set_input("-1")
    assert session.show_result is False
    assert session.description == ""


def test_swap_reruns_conversion():
    session = ConverterSession(Category.TEMPERATURE, input_value="100")
    assert session.result == 212
    session.swap_units()
    assert (session.from_unit, session.to_unit) == (u.FAHRENHEIT, u.CELSIUS)
    assert session.result == pytest.approx(37.7778, abs=1e-4)
    session.swap_units()
    assert session.result == 212


def test_temperature_warning():
    session = ConverterSession(Category.TEMPERATURE, input_value="-5", from_unit=u.KELVIN)
    assert session.has_temperature_warning is True
    assert session.result is None


def test_rejects_units_from_other_categories():
    session = ConverterSession(Category.WEIGHT)
    with pytest.raises(ValueError):
        session.set_from_unit(u.METER)
    with pytest.raises(ValueError):
        ConverterSession(Category.LENGTH, to_unit=u.GRAM)


def test_currency_requires_store():
    with pytest.raises(ValueError):
        ConverterSession(Category.CURRENCY)


def test_currency_session_recomputes_on_new_rates(make_store, fetcher):
    store = make_store()
    session = ConverterSession(Category.CURRENCY, store=store, input_value="1000")
    # no snapshot yet: static fallback table
    assert session.result == pytest.approx(6.9)

    asyncio.run(store.fetch_rates())
    assert session.result == pytest.approx(7.7)
    assert session.rate_info == "1 KES = 0.0077 USD"

    session.close()
    fetcher.rates = {"KES": 1.0, "USD": 0.01}
    asyncio.run(store.fetch_rates())
    # unsubscribed: keeps the last computed value
    assert session.result == pytest.approx(7.7)


def test_temperature_context_uses_celsius():
    session = ConverterSession(Category.TEMPERATURE, input_value="35", from_unit=u.CELSIUS, to_unit=u.KELVIN)
    assert session.result == pytest.approx(308.15)
    assert session.temperature_context == "Hot"
    assert ConverterSession(Category.WEIGHT, input_value="1").temperature_context is None
