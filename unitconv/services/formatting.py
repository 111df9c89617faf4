"""Display formatting helpers.

Centralized so the API, the converter session, and any future client use
identical magnitude thresholds.
"""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Mapping, Optional

from unitconv.models.constants import Category
from unitconv.models.units import Unit
from .conversion import conversion_rate

SCIENTIFIC_THRESHOLD = 1e6
INTEGER_THRESHOLD = 1000
TWO_DECIMAL_THRESHOLD = 1

_TEMPERATURE_REFERENCES = {
    ("c", "f"): "0°C = 32°F | 100°C = 212°F",
    ("f", "c"): "32°F = 0°C | 212°F = 100°C",
    ("c", "k"): "0°C = 273.15K | 100°C = 373.15K",
    ("k", "c"): "273.15K = 0°C | 373.15K = 100°C",
    ("f", "k"): "32°F = 273.15K | 212°F = 373.15K",
    ("k", "f"): "273.15K = 32°F | 373.15K = 212°F",
}


def format_result(value: Optional[float]) -> str:
    """≥1e6 scientific, ≥1000 integer, ≥1 two decimals, else four decimals."""
    if value is None or not math.isfinite(value):
        return ""
    magnitude = abs(value)
    if magnitude >= SCIENTIFIC_THRESHOLD:
        return f"{value:.2e}"
    if magnitude >= INTEGER_THRESHOLD:
        return f"{value:.0f}"
    if magnitude >= TWO_DECIMAL_THRESHOLD:
        return f"{value:.2f}"
    return f"{value:.4f}"


def format_preset(value: float) -> str:
    if value >= 1000 or float(value).is_integer():
        return f"{value:.0f}"
    return f"{value:.1f}"


def describe(value: float, from_unit: Unit, result: float, to_unit: Unit) -> str:
    return (
        f"{format_result(value)} {from_unit.symbol} = "
        f"{format_result(result)} {to_unit.symbol}"
    )


def rate_info(
    from_unit: Unit, to_unit: Unit, rates: Optional[Mapping[str, float]] = None
) -> str:
    if from_unit.category is Category.TEMPERATURE:
        return _TEMPERATURE_REFERENCES.get(
            (from_unit.id, to_unit.id), "Temperature conversion"
        )
    rate = conversion_rate(from_unit, to_unit, rates)
    if rate is None:
        return ""
    return f"1 {from_unit.symbol} = {rate:.4f} {to_unit.symbol}"


def data_age(age: Optional[timedelta]) -> str:
    if age is None:
        return "No data"
    seconds = max(int(age.total_seconds()), 0)
    hours, rest = divmod(seconds, 3600)
    minutes = rest // 60
    if hours > 0:
        return f"{hours}h {minutes}m ago"
    return f"{minutes}m ago"
