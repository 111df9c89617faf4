from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import BASE_CURRENCY, FALLBACK_RATES


def _clean_rates(v: Dict[str, float]) -> Dict[str, float]:
    cleaned: Dict[str, float] = {}
    for code, rate in v.items():
        if not isinstance(rate, (int, float)) or isinstance(rate, bool):
            raise ValueError(f"rate for {code} is not a number")
        try:
            rate = float(rate)
        except OverflowError:
            raise ValueError(f"rate for {code} is out of range") from None
        if not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"rate for {code} must be a positive finite number")
        cleaned[code.upper()] = rate
    return cleaned


class ExchangeRateResponse(BaseModel):
    """Body of GET {base}/latest/{currency}. Untrusted; validated before use."""

    base: str
    date: str
    rates: Dict[str, float]

    @field_validator("rates", mode="before")
    @classmethod
    def positive_rates(cls, v):
        if not isinstance(v, dict) or not v:
            raise ValueError("rates must be a non-empty object")
        return _clean_rates(v)

    @field_validator("base")
    @classmethod
    def upper_base(cls, v: str) -> str:
        return v.upper()


class RateSnapshot(BaseModel):
    """Immutable set of rates (units per 1 base currency) plus fetch time.

    Replaced wholesale on every successful fetch. Serialized with the
    ``rates`` / ``lastUpdated`` / ``baseCurrency`` keys used by the persisted
    cache record. The static fallback table has no ``fetched_at``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rates: Dict[str, float]
    fetched_at: Optional[datetime] = Field(None, alias="lastUpdated")
    base_currency: str = Field(BASE_CURRENCY, alias="baseCurrency")

    @field_validator("rates", mode="before")
    @classmethod
    def valid_rates(cls, v):
        if not isinstance(v, dict):
            raise ValueError("rates must be an object")
        return _clean_rates(v)

    @field_validator("fetched_at")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def from_response(
        cls, resp: ExchangeRateResponse, fetched_at: datetime
    ) -> "RateSnapshot":
        rates = dict(resp.rates)
        rates.setdefault(resp.base, 1.0)
        return cls(rates=rates, fetched_at=fetched_at, base_currency=resp.base)

    @classmethod
    def static(cls) -> "RateSnapshot":
        return cls(rates=dict(FALLBACK_RATES), fetched_at=None, base_currency=BASE_CURRENCY)

    @property
    def is_static(self) -> bool:
        return self.fetched_at is None

    def age(self, now: datetime) -> Optional[timedelta]:
        if self.fetched_at is None:
            return None
        return now - self.fetched_at

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
