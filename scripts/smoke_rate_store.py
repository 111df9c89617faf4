"""Smoke script for the exchange-rate store.

Demonstrates:
 1. Loading the persisted snapshot (if any) from the configured SQLite file.
 2. A live refresh (falls back to cached / static rates when offline).
 3. A KES -> USD -> EUR conversion with whatever rates ended up current.

NOTE: This is a lightweight diagnostic and not a formal test.
Run with: python -m scripts.smoke_rate_store
"""

import asyncio
from pprint import pprint

from unitconv.core.config import get_settings
from unitconv.main import build_rate_store
from unitconv.models import units as u
from unitconv.services.conversion import convert


async def run():
    store = build_rate_store(get_settings())
    out = {
        "initial": {"state": store.state.value, "age": store.data_age()},
    }
    snapshot = await store.fetch_rates()
    out["after_refresh"] = {
        "state": store.state.value,
        "advisory": store.last_error,
        "fetched_at": snapshot.fetched_at.isoformat() if snapshot.fetched_at else None,
        "codes": sorted(snapshot.rates)[:10],
    }
    out["1000 KES"] = {
        "USD": convert(1000, u.KES, u.USD, store.rates),
        "EUR": convert(1000, u.KES, u.EUR, store.rates),
    }
    out["100 USD in EUR"] = convert(100, u.USD, u.EUR, store.rates)
    await store.aclose()
    pprint(out)


if __name__ == "__main__":
    asyncio.run(run())
