"""Domain models for the unit converter."""

from .constants import (
    BASE_CURRENCY,
    FALLBACK_RATES,
    PRESET_VALUES,
    Category,
)  # re-export
from .conversion import ConversionRequest
from .rates import ExchangeRateResponse, RateSnapshot
from .units import DEFAULT_PAIRS, UNITS, Unit, get_unit, units_for

__all__ = [
    "BASE_CURRENCY",
    "FALLBACK_RATES",
    "PRESET_VALUES",
    "Category",
    "ConversionRequest",
    "ExchangeRateResponse",
    "RateSnapshot",
    "DEFAULT_PAIRS",
    "UNITS",
    "Unit",
    "get_unit",
    "units_for",
]
