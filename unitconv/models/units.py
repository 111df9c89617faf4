"""Static unit catalog.

Every unit carries a factor to its category's base unit (grams, meters,
Celsius, KES). Temperature factors are placeholders: those units are offset
scales and are converted through Celsius instead. Currency factors are
approximate rates used only when a snapshot lacks the code.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple

from .constants import Category


@dataclass(frozen=True)
class Unit:
    id: str
    name: str
    symbol: str
    conversion_factor: float
    category: Category

    @property
    def rate_code(self) -> str:
        """Key used to look this unit up in a rate table (currency only)."""
        return self.symbol.upper()

    def as_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["category"] = self.category.value
        return data


# Weight (base: grams)
KILOGRAM = Unit("kg", "Kilograms", "kg", 1000.0, Category.WEIGHT)
GRAM = Unit("g", "Grams", "g", 1.0, Category.WEIGHT)
POUND = Unit("lbs", "Pounds", "lbs", 453.592, Category.WEIGHT)
OUNCE = Unit("oz", "Ounces", "oz", 28.3495, Category.WEIGHT)
STONE = Unit("st", "Stone", "st", 6350.29, Category.WEIGHT)
TON = Unit("t", "Metric Tons", "t", 1_000_000.0, Category.WEIGHT)

# Length (base: meters)
METER = Unit("m", "Meters", "m", 1.0, Category.LENGTH)
CENTIMETER = Unit("cm", "Centimeters", "cm", 0.01, Category.LENGTH)
KILOMETER = Unit("km", "Kilometers", "km", 1000.0, Category.LENGTH)
FOOT = Unit("ft", "Feet", "ft", 0.3048, Category.LENGTH)
INCH = Unit("in", "Inches", "in", 0.0254, Category.LENGTH)
MILE = Unit("mi", "Miles", "mi", 1609.34, Category.LENGTH)

# Temperature (base: Celsius)
CELSIUS = Unit("c", "Celsius", "°C", 1.0, Category.TEMPERATURE)
FAHRENHEIT = Unit("f", "Fahrenheit", "°F", 1.0, Category.TEMPERATURE)
KELVIN = Unit("k", "Kelvin", "K", 1.0, Category.TEMPERATURE)

# Currency (base: KES)
KES = Unit("kes", "Kenyan Shilling", "KES", 1.0, Category.CURRENCY)
USD = Unit("usd", "US Dollar", "USD", 0.007, Category.CURRENCY)
EUR = Unit("eur", "Euro", "EUR", 0.006, Category.CURRENCY)
GBP = Unit("gbp", "British Pound", "GBP", 0.005, Category.CURRENCY)
JPY = Unit("jpy", "Japanese Yen", "JPY", 1.0, Category.CURRENCY)
CAD = Unit("cad", "Canadian Dollar", "CAD", 0.009, Category.CURRENCY)
AUD = Unit("aud", "Australian Dollar", "AUD", 0.010, Category.CURRENCY)

UNITS: Tuple[Unit, ...] = (
    KILOGRAM, GRAM, POUND, OUNCE, STONE, TON,
    METER, CENTIMETER, KILOMETER, FOOT, INCH, MILE,
    CELSIUS, FAHRENHEIT, KELVIN,
    KES, USD, EUR, GBP, JPY, CAD, AUD,
)

_BY_ID: Dict[str, Unit] = {u.id: u for u in UNITS}

# Initial from/to selection for each converter screen
DEFAULT_PAIRS: Dict[Category, Tuple[Unit, Unit]] = {
    Category.WEIGHT: (KILOGRAM, GRAM),
    Category.LENGTH: (METER, FOOT),
    Category.TEMPERATURE: (CELSIUS, FAHRENHEIT),
    Category.CURRENCY: (KES, USD),
}


def get_unit(unit_id: str) -> Optional[Unit]:
    return _BY_ID.get(unit_id.strip().lower())


def units_for(category: Category) -> List[Unit]:
    return [u for u in UNITS if u.category is category]
