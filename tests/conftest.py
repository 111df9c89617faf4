from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

from unitconv.models.rates import ExchangeRateResponse, RateSnapshot
from unitconv.services.rates.base import RateFetcher
from unitconv.services.rates.cache import InMemoryRateCache
from unitconv.services.rates.store import ExchangeRateStore

LIVE_RATES: Dict[str, float] = {
    "KES": 1.0,
    "USD": 0.0077,
    "EUR": 0.0071,
    "GBP": 0.0061,
    "JPY": 1.15,
}


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeFetcher(RateFetcher):
    """Returns canned rates or raises ``error``; counts calls."""

    def __init__(
        self,
        rates: Optional[Dict[str, float]] = None,
        error: Optional[Exception] = None,
        base: str = "KES",
        delay: float = 0.0,
    ):
        self.rates = dict(rates or LIVE_RATES)
        self.error = error
        self.base = base
        self.delay = delay
        self.calls = 0
        self.requested: List[str] = []
        self.closed = False

    async def fetch_latest(self, base_currency: str) -> ExchangeRateResponse:
        self.calls += 1
        self.requested.append(base_currency)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return ExchangeRateResponse(base=self.base, date="2026-10-19", rates=self.rates)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def cache() -> InMemoryRateCache:
    return InMemoryRateCache()


@pytest.fixture
def make_store(fetcher, cache, clock):
    def _make(fetcher=fetcher, cache=cache) -> ExchangeRateStore:
        return ExchangeRateStore(fetcher, cache, clock=clock)

    return _make


@pytest.fixture
def snapshot_at(clock):
    """Build a persisted-looking snapshot fetched ``hours`` before now."""

    def _make(hours: float, rates: Optional[Dict[str, float]] = None) -> RateSnapshot:
        return RateSnapshot(
            rates=rates or {"KES": 1.0, "USD": 0.0080, "EUR": 0.0070},
            fetched_at=clock.now - timedelta(hours=hours),
            base_currency="KES",
        )

    return _make
