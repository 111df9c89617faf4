"""Per-converter state: input text, selected units, current result.

One session backs one converter screen. A currency session subscribes to the
rate store and recomputes whenever a new snapshot is published; other
categories never touch rates.
"""

from __future__ import annotations

from typing import Callable, Optional

from unitconv.models.constants import Category
from unitconv.models.rates import RateSnapshot
from unitconv.models.units import CELSIUS, DEFAULT_PAIRS, Unit, units_for
from unitconv.services import formatting
from unitconv.services.conversion import below_absolute_zero, convert, temperature_context
from unitconv.services.rates.store import ExchangeRateStore


class ConverterSession:
    def __init__(
        self,
        category: Category,
        store: Optional[ExchangeRateStore] = None,
        input_value: str = "",
        from_unit: Optional[Unit] = None,
        to_unit: Optional[Unit] = None,
    ):
        if category is Category.CURRENCY and store is None:
            raise ValueError("currency converter needs a rate store")
        self.category = category
        self.input_value = input_value
        default_from, default_to = DEFAULT_PAIRS[category]
        self.from_unit = from_unit or default_from
        self.to_unit = to_unit or default_to
        self._check_category(self.from_unit)
        self._check_category(self.to_unit)
        self.result: Optional[float] = None
        self._store = store if category is Category.CURRENCY else None
        self._unsubscribe: Optional[Callable[[], None]] = None
        if self._store is not None:
            self._unsubscribe = self._store.subscribe(self._on_rates_changed)
        self.perform_conversion()

    @property
    def available_units(self):
        return units_for(self.category)

    @property
    def title(self) -> str:
        return f"{self.category.display_name} Converter"

    @property
    def subtitle(self) -> str:
        return f"Convert {self.from_unit.name} to {self.to_unit.name}"

    @property
    def show_result(self) -> bool:
        return self.result is not None

    @property
    def formatted_result(self) -> str:
        return formatting.format_result(self.result)

    @property
    def description(self) -> str:
        if self.result is None:
            return ""
        return f"{str(self.input_value).strip()} {self.from_unit.symbol} = {self.formatted_result} {self.to_unit.symbol}"

    @property
    def rate_info(self) -> str:
        return formatting.rate_info(self.from_unit, self.to_unit, self._rates())

    @property
    def has_temperature_warning(self) -> bool:
        return below_absolute_zero(self.input_value, self.from_unit)

    @property
    def temperature_context(self) -> Optional[str]:
        if self.category is not Category.TEMPERATURE or self.result is None:
            return None
        celsius = convert(self.result, self.to_unit, CELSIUS)
        return temperature_context(celsius) if celsius is not None else None

    def _rates(self):
        return self._store.rates if self._store is not None else None

    def perform_conversion(self) -> Optional[float]:
        self.result = convert(self.input_value, self.from_unit, self.to_unit, self._rates())
        return self.result

    # Input handlers --------------------------------------------
    def set_input(self, text: str) -> Optional[float]:
        self.input_value = text
        return self.perform_conversion()

    def set_from_unit(self, unit: Unit) -> Optional[float]:
        self._check_category(unit)
        self.from_unit = unit
        return self.perform_conversion()

    def set_to_unit(self, unit: Unit) -> Optional[float]:
        self._check_category(unit)
        self.to_unit = unit
        return self.perform_conversion()

    def swap_units(self) -> Optional[float]:
        self.from_unit, self.to_unit = self.to_unit, self.from_unit
        return self.perform_conversion()

    def _check_category(self, unit: Unit) -> None:
        if unit.category is not self.category:
            raise ValueError(
                f"{unit.name} is not a {self.category.value} unit"
            )

    def _on_rates_changed(self, snapshot: RateSnapshot) -> None:
        self.perform_conversion()

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
