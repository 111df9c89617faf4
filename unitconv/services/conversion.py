"""Unit conversion (pure functions).

Weight and length use a base-unit factor model. Temperature goes through a
Celsius pivot because Fahrenheit and Kelvin are offset scales. Currency goes
through KES using the rates of the current snapshot, falling back to each
unit's static approximate factor for codes the snapshot lacks.

Invalid input (empty, non-numeric, NaN/inf, negative) yields ``None``:
the display layer hides the result instead of showing an error.
"""

from __future__ import annotations

import math
from typing import Mapping, Optional, Union

from unitconv.models.constants import BASE_CURRENCY, Category
from unitconv.models.conversion import ConversionRequest, ConversionResult
from unitconv.models.units import Unit

ABSOLUTE_ZERO_C = -273.15

Number = Union[int, float]
RawValue = Union[Number, str, None]


def parse_value(value: RawValue, allow_negative: bool = False) -> Optional[float]:
    """Turn input-field text or a number into a usable float, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    elif isinstance(value, (int, float)):
        number = float(value)
    else:
        return None
    if not math.isfinite(number):
        return None
    if number < 0 and not allow_negative:
        return None
    return number


def convert(
    value: RawValue,
    from_unit: Unit,
    to_unit: Unit,
    rates: Optional[Mapping[str, float]] = None,
) -> Optional[float]:
    if from_unit.category is not to_unit.category:
        return None
    temperature = from_unit.category is Category.TEMPERATURE
    # Negative temperatures are real readings; other categories reject them.
    amount = parse_value(value, allow_negative=temperature)
    if amount is None:
        return None
    if temperature and to_celsius(amount, from_unit) < ABSOLUTE_ZERO_C:
        return None
    if from_unit == to_unit:
        return amount

    if temperature:
        result = from_celsius(to_celsius(amount, from_unit), to_unit)
    elif from_unit.category is Category.CURRENCY:
        result = _convert_currency(amount, from_unit, to_unit, rates)
    else:
        result = amount * from_unit.conversion_factor / to_unit.conversion_factor

    if not math.isfinite(result):
        return None
    return result


def convert_request(
    request: ConversionRequest, rates: Optional[Mapping[str, float]] = None
) -> ConversionResult:
    value = convert(request.value, request.from_unit, request.to_unit, rates)
    return ConversionResult(request=request, value=value)


def swap(
    request: ConversionRequest, rates: Optional[Mapping[str, float]] = None
) -> ConversionResult:
    """Exchange from/to and convert the original input again."""
    return convert_request(request.swapped(), rates)


def conversion_rate(
    from_unit: Unit, to_unit: Unit, rates: Optional[Mapping[str, float]] = None
) -> Optional[float]:
    """How many `to_unit` one `from_unit` is worth (linear and currency only)."""
    if from_unit.category is Category.TEMPERATURE:
        return None
    return convert(1, from_unit, to_unit, rates)


# Temperature --------------------------------------------------------------


def to_celsius(value: float, unit: Unit) -> float:
    if unit.id == "f":
        return (value - 32) * 5 / 9
    if unit.id == "k":
        return value - 273.15
    return value


def from_celsius(celsius: float, unit: Unit) -> float:
    if unit.id == "f":
        return celsius * 9 / 5 + 32
    if unit.id == "k":
        return celsius + 273.15
    return celsius


def below_absolute_zero(value: RawValue, unit: Unit) -> bool:
    """Warning flag for readings colder than 0 K (e.g. negative Kelvin input)."""
    number = parse_value(value, allow_negative=True)
    if number is None or unit.category is not Category.TEMPERATURE:
        return False
    return to_celsius(number, unit) < ABSOLUTE_ZERO_C


_CONTEXT_BANDS = (
    (-40, "Extremely cold"),
    (0, "Freezing"),
    (10, "Cold"),
    (20, "Cool"),
    (30, "Comfortable"),
    (40, "Hot"),
)


def temperature_context(celsius: float) -> str:
    for upper, label in _CONTEXT_BANDS:
        if celsius < upper:
            return label
    return "Extremely hot"


# Currency -----------------------------------------------------------------


def _rate(unit: Unit, rates: Optional[Mapping[str, float]]) -> float:
    code = unit.rate_code
    if code == BASE_CURRENCY:
        return 1.0
    if rates:
        rate = rates.get(code)
        if rate is not None and rate > 0:
            return rate
    return unit.conversion_factor


def _convert_currency(
    amount: float,
    from_unit: Unit,
    to_unit: Unit,
    rates: Optional[Mapping[str, float]],
) -> float:
    # Rates are units of currency per 1 KES.
    if from_unit.rate_code == BASE_CURRENCY:
        return amount * _rate(to_unit, rates)
    if to_unit.rate_code == BASE_CURRENCY:
        return amount / _rate(from_unit, rates)
    kes_value = amount / _rate(from_unit, rates)
    return kes_value * _rate(to_unit, rates)
