from __future__ import annotations

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field, field_validator, model_validator

from unitconv.models.constants import PRESET_VALUES, Category
from unitconv.models.units import DEFAULT_PAIRS, UNITS, Unit, get_unit, units_for
from unitconv.services.formatting import format_preset
from unitconv.services.rates.store import ExchangeRateStore
from unitconv.services.session import ConverterSession
from .rates import get_rate_store

router = APIRouter(tags=["convert"])


class UnitOut(BaseModel):
    id: str
    name: str
    symbol: str
    conversion_factor: float
    category: Category

    @classmethod
    def from_unit(cls, unit: Unit) -> "UnitOut":
        return cls(**unit.as_dict())


class ConvertPayload(BaseModel):
    value: Union[float, str, None] = Field(
        None, description="Number or raw input text; invalid input yields no result"
    )
    from_unit: str = Field(..., description="Unit id, e.g. kg, ft, c, usd")
    to_unit: str = Field(..., description="Unit id in the same category")

    @field_validator("from_unit", "to_unit")
    @classmethod
    def known_unit(cls, v: str) -> str:
        unit = get_unit(v)
        if unit is None:
            raise ValueError(f"unknown unit '{v}'")
        return unit.id

    @model_validator(mode="after")
    def same_category(self) -> "ConvertPayload":
        if self.source.category is not self.target.category:
            raise ValueError("from_unit and to_unit must share a category")
        return self

    @property
    def source(self) -> Unit:
        return get_unit(self.from_unit)  # type: ignore[return-value]

    @property
    def target(self) -> Unit:
        return get_unit(self.to_unit)  # type: ignore[return-value]

    @property
    def input_text(self) -> str:
        return "" if self.value is None else str(self.value)


class ConvertOut(BaseModel):
    category: Category
    from_unit: str
    to_unit: str
    value: str
    result: Optional[float]
    formatted: str
    description: str
    rate_info: str
    context: Optional[str] = None
    warning: Optional[str] = None


def _run(
    payload: ConvertPayload, store: ExchangeRateStore, swap: bool = False
) -> ConvertOut:
    session = ConverterSession(
        payload.source.category,
        store=store,
        input_value=payload.input_text,
        from_unit=payload.source,
        to_unit=payload.target,
    )
    try:
        if swap:
            session.swap_units()
        warning = None
        if session.has_temperature_warning:
            warning = "Temperature is below absolute zero"
        return ConvertOut(
            category=session.category,
            from_unit=session.from_unit.id,
            to_unit=session.to_unit.id,
            value=payload.input_text,
            result=session.result,
            formatted=session.formatted_result,
            description=session.description,
            rate_info=session.rate_info,
            context=session.temperature_context,
            warning=warning,
        )
    finally:
        session.close()


class CategoryOut(BaseModel):
    id: Category
    name: str
    subtitle: str
    base_unit: str
    default_from: str
    default_to: str
    presets: List[str]


@router.get("/categories", response_model=List[CategoryOut], summary="Converter screens")
async def list_categories():
    out = []
    for category in Category:
        default_from, default_to = DEFAULT_PAIRS[category]
        out.append(
            CategoryOut(
                id=category,
                name=f"{category.display_name} Converter",
                subtitle=f"Convert {default_from.name} to {default_to.name}",
                base_unit=category.base_unit_id,
                default_from=default_from.id,
                default_to=default_to.id,
                presets=[format_preset(v) for v in PRESET_VALUES],
            )
        )
    return out


@router.get("/units", response_model=List[UnitOut], summary="Unit catalog")
async def list_units(category: Optional[Category] = Query(None)):
    units = units_for(category) if category is not None else list(UNITS)
    return [UnitOut.from_unit(u) for u in units]


@router.post("/convert", response_model=ConvertOut, summary="Convert a value")
async def convert_value(
    payload: ConvertPayload, store: ExchangeRateStore = Depends(get_rate_store)
):
    return _run(payload, store)


@router.post(
    "/convert/swap",
    response_model=ConvertOut,
    summary="Convert a value with from/to units exchanged",
)
async def convert_swapped(
    payload: ConvertPayload, store: ExchangeRateStore = Depends(get_rate_store)
):
    return _run(payload, store, swap=True)
