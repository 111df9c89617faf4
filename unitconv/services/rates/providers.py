from __future__ import annotations

"""Concrete rate fetchers and factory.

'external-http' talks to the exchange-rate API; 'static' serves the built-in
fallback table as if it had been fetched, for offline development.
"""
import asyncio
from datetime import date
from typing import Callable, Dict, Optional

import httpx
from pydantic import ValidationError

from unitconv.core.config import Settings
from unitconv.models.constants import FALLBACK_RATES
from unitconv.models.rates import ExchangeRateResponse
from unitconv.services.http_client import (
    DecodingError,
    Timeout,
    build_async_client,
    get_json,
)
from .base import RateFetcher


class StaticRateFetcher(RateFetcher):
    async def fetch_latest(self, base_currency: str) -> ExchangeRateResponse:
        return ExchangeRateResponse(
            base=base_currency,
            date=date.today().isoformat(),
            rates=dict(FALLBACK_RATES),
        )


class HttpRateFetcher(RateFetcher):
    """GET {exchange_api_base_url}/latest/{base_currency}.

    The per-operation timeout lives on the httpx client; the whole call
    (retries included) is additionally bounded by ``http_total_timeout_seconds``.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self._settings = settings
        self._owns_client = client is None
        self._client = client or build_async_client(settings)

    def url_for(self, base_currency: str) -> str:
        base = str(self._settings.exchange_api_base_url).rstrip("/")
        return f"{base}/latest/{base_currency}"

    async def fetch_latest(self, base_currency: str) -> ExchangeRateResponse:
        url = self.url_for(base_currency)
        try:
            data = await asyncio.wait_for(
                get_json(self._client, url, retries=self._settings.http_retries),
                timeout=self._settings.http_total_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise Timeout() from e
        try:
            return ExchangeRateResponse.model_validate(data)
        except ValidationError as e:
            raise DecodingError(f"Failed to decode server response: {e.error_count()} errors") from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


_FETCHER_REGISTRY: Dict[str, Callable[..., RateFetcher]] = {
    "static": lambda settings, client=None: StaticRateFetcher(),
    "external-http": HttpRateFetcher,
}


def make_rate_fetcher(
    kind: str, settings: Settings, client: Optional[httpx.AsyncClient] = None
) -> RateFetcher:
    factory = _FETCHER_REGISTRY.get(kind)
    if not factory:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    return factory(settings, client)
