from __future__ import annotations

"""Exchange-rate store.

Purpose:
    Hold the current rate snapshot, refresh it from the network, persist each
    successful fetch, and degrade to cached-then-static rates on failure.

States:
    empty -> loading -> ready            (first fetch)
    ready -> loading -> ready            (refresh)
    loading -> stale | fallback          (fetch failed; cached / static rates)

Refreshes are coalesced: while one fetch is in flight, further calls to
fetch_rates() await that same fetch instead of issuing a second request.

Listeners registered with subscribe() receive every new current snapshot.
The snapshot is swapped with a single assignment, so readers never observe a
partially updated rate table.
"""
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from unitconv.core.config import Settings
from unitconv.models.constants import BASE_CURRENCY, STALE_AFTER_SECONDS
from unitconv.models.rates import RateSnapshot
from unitconv.services.formatting import data_age
from unitconv.services.http_client import DecodingError, NetworkError
from .base import CacheError, RateCache, RateFetcher

logger = logging.getLogger("unitconv.rates.store")

Listener = Callable[[RateSnapshot], None]
Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RateStoreState(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    STALE = "stale"
    FALLBACK = "fallback"


_MISSING = object()


class ExchangeRateStore:
    def __init__(
        self,
        fetcher: RateFetcher,
        cache: RateCache,
        *,
        stale_after: timedelta = timedelta(seconds=STALE_AFTER_SECONDS),
        clock: Clock = utcnow,
    ):
        self._fetcher = fetcher
        self._cache = cache
        self._base_currency = BASE_CURRENCY
        self._stale_after = stale_after
        self._clock = clock
        self._listeners: List[Listener] = []
        self._inflight: Optional[asyncio.Task] = None
        self._last_error: Optional[str] = None
        self._current: Optional[RateSnapshot] = self.get_cached_rates()
        if self._current is None:
            self._state = RateStoreState.EMPTY
        elif self.is_stale(self._current):
            self._state = RateStoreState.STALE
        else:
            self._state = RateStoreState.READY

    @classmethod
    def from_settings(
        cls, settings: Settings, fetcher: RateFetcher, cache: RateCache
    ) -> "ExchangeRateStore":
        return cls(
            fetcher,
            cache,
            stale_after=timedelta(seconds=settings.rates_stale_after_seconds),
        )

    # Read side -------------------------------------------------
    @property
    def state(self) -> RateStoreState:
        return self._state

    @property
    def current(self) -> Optional[RateSnapshot]:
        return self._current

    @property
    def rates(self) -> Mapping[str, float]:
        """Rates conversion should use right now (read-only view)."""
        snapshot = self._current
        if snapshot is None:
            snapshot = RateSnapshot.static()
        return MappingProxyType(snapshot.rates)

    @property
    def last_error(self) -> Optional[str]:
        """Advisory message from the last failed refresh, None after a success."""
        return self._last_error

    @property
    def last_updated(self) -> Optional[datetime]:
        return self._current.fetched_at if self._current else None

    @property
    def is_loading(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def get_cached_rates(self) -> Optional[RateSnapshot]:
        try:
            return self._cache.load()
        except CacheError:
            logger.warning("cached rates unavailable", exc_info=True)
            return None

    def is_stale(self, snapshot=_MISSING) -> bool:
        """True when ``snapshot`` (default: the persisted one) is older than the threshold."""
        if snapshot is _MISSING:
            snapshot = self.get_cached_rates()
        if snapshot is None or snapshot.fetched_at is None:
            return True
        return self._clock() - snapshot.fetched_at > self._stale_after

    def get_rates_with_fallback(self) -> Dict[str, float]:
        cached = self.get_cached_rates()
        if cached is not None and not self.is_stale(cached):
            return dict(cached.rates)
        return RateSnapshot.static().rates

    def data_age(self) -> str:
        if self._current is None:
            return data_age(None)
        return data_age(self._current.age(self._clock()))

    # Subscriptions ---------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, snapshot: RateSnapshot) -> None:
        changed = snapshot != self._current
        self._current = snapshot
        if not changed:
            return
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("rate listener failed")

    # Refresh ---------------------------------------------------
    async def fetch_rates(self) -> RateSnapshot:
        """Fetch live rates; on failure return cached, then static rates. Never raises."""
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._fetch())
        else:
            logger.debug("refresh already in flight; joining it")
        return await asyncio.shield(self._inflight)

    async def refresh_if_stale(self) -> RateSnapshot:
        if self.is_stale(self._current):
            return await self.fetch_rates()
        return self._current  # type: ignore[return-value]

    async def _fetch(self) -> RateSnapshot:
        self._state = RateStoreState.LOADING
        try:
            resp = await self._fetcher.fetch_latest(self._base_currency)
            if resp.base != self._base_currency:
                raise DecodingError(
                    f"Expected rates for {self._base_currency}, got {resp.base}"
                )
        except NetworkError as e:
            return await self._fall_back(e)
        except Exception as e:
            logger.exception("unexpected error while fetching rates")
            err = NetworkError()
            err.__cause__ = e
            return await self._fall_back(err)

        snapshot = RateSnapshot.from_response(resp, self._clock())
        try:
            await asyncio.to_thread(self._cache.save, snapshot)
        except CacheError:
            logger.warning("fetched rates could not be persisted", exc_info=True)
        self._last_error = None
        self._replace(snapshot)
        self._state = RateStoreState.READY
        logger.info(
            "exchange rates updated",
            extra={"source": "live", "state": self._state.value},
        )
        return snapshot

    async def _fall_back(self, err: NetworkError) -> RateSnapshot:
        self._last_error = f"Failed to update rates: {err}"
        cached = await asyncio.to_thread(self.get_cached_rates)
        if cached is not None:
            snapshot, self._state = cached, RateStoreState.STALE
        else:
            snapshot, self._state = RateSnapshot.static(), RateStoreState.FALLBACK
        self._replace(snapshot)
        logger.warning(
            "rate fetch failed; using %s rates",
            "cached" if self._state is RateStoreState.STALE else "fallback",
            extra={"error": str(err), "state": self._state.value},
        )
        return snapshot

    async def aclose(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            await asyncio.shield(self._inflight)
        await self._fetcher.aclose()
