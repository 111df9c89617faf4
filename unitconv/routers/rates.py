from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from unitconv.models.constants import BASE_CURRENCY
from unitconv.services.rates.store import ExchangeRateStore

"""Rates router.

Endpoints:
    - GET /rates          -> current snapshot, state, staleness, data age
    - POST /rates/refresh -> fetch live rates (falls back to cached/static)

A failed refresh is not an HTTP error: the response carries the rates now in
use plus an advisory message.
"""

router = APIRouter(prefix="/rates", tags=["rates"])


def get_rate_store(request: Request) -> ExchangeRateStore:
    return request.app.state.rate_store


class RatesOut(BaseModel):
    base_currency: str
    rates: Dict[str, float]
    fetched_at: Optional[datetime]
    state: str
    is_stale: bool
    data_age: str
    advisory: Optional[str] = None

    @classmethod
    def from_store(cls, store: ExchangeRateStore) -> "RatesOut":
        snapshot = store.current
        return cls(
            base_currency=snapshot.base_currency if snapshot else BASE_CURRENCY,
            rates=dict(store.rates),
            fetched_at=store.last_updated,
            state=store.state.value,
            is_stale=store.is_stale(snapshot),
            data_age=store.data_age(),
            advisory=store.last_error,
        )


@router.get("", response_model=RatesOut, summary="Rates currently used for conversion")
async def get_rates(store: ExchangeRateStore = Depends(get_rate_store)):
    return RatesOut.from_store(store)


@router.post("/refresh", response_model=RatesOut, summary="Fetch live exchange rates")
async def refresh_rates(store: ExchangeRateStore = Depends(get_rate_store)):
    await store.fetch_rates()
    return RatesOut.from_store(store)
