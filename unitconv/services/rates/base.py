from __future__ import annotations

"""Rate fetching and caching abstractions.

The store depends only on these interfaces; production code plugs in the
HTTP fetcher and the SQLite cache, tests plug in in-memory fakes.
"""
from abc import ABC, abstractmethod
from typing import Optional

from unitconv.models.rates import ExchangeRateResponse, RateSnapshot


class RateFetcher(ABC):
    @abstractmethod
    async def fetch_latest(self, base_currency: str) -> ExchangeRateResponse:
        """Return the latest rates for ``base_currency``.

        Raises NetworkError (or a subclass) on any failure.
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        return None


class RateCache(ABC):
    """Single-record snapshot persistence: every save overwrites the last."""

    @abstractmethod
    def load(self) -> Optional[RateSnapshot]:
        raise NotImplementedError

    @abstractmethod
    def save(self, snapshot: RateSnapshot) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError


class CacheError(Exception):
    pass
