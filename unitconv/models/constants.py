"""Domain constants and enumerations for validation."""

from enum import Enum
from typing import Dict, List


class Category(str, Enum):
    WEIGHT = "weight"
    LENGTH = "length"
    TEMPERATURE = "temperature"
    CURRENCY = "currency"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def base_unit_id(self) -> str:
        return _BASE_UNITS[self]


_BASE_UNITS: Dict[Category, str] = {
    Category.WEIGHT: "g",
    Category.LENGTH: "m",
    Category.TEMPERATURE: "c",
    Category.CURRENCY: "kes",
}

BASE_CURRENCY = "KES"

# Units of currency per 1 KES, used when neither a live nor a cached table exists.
FALLBACK_RATES: Dict[str, float] = {
    "KES": 1.0,
    "USD": 0.0069,
    "EUR": 0.0063,
    "GBP": 0.0054,
    "JPY": 1.02,
    "CAD": 0.0094,
    "AUD": 0.0104,
}

PRESET_VALUES: List[int] = [1, 10, 100, 1000]

STALE_AFTER_SECONDS = 14400  # 4 hours
