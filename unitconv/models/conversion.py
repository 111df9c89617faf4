from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .units import Unit


@dataclass(frozen=True)
class ConversionRequest:
    value: Union[float, str, None]
    from_unit: Unit
    to_unit: Unit

    def swapped(self) -> "ConversionRequest":
        return ConversionRequest(self.value, self.to_unit, self.from_unit)


@dataclass(frozen=True)
class ConversionResult:
    request: ConversionRequest
    value: Optional[float]
