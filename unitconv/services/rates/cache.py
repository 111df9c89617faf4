from __future__ import annotations

"""Persisted rate snapshot (single overwritten record).

The snapshot is stored as one JSON blob
``{"rates": {...}, "lastUpdated": ..., "baseCurrency": ...}`` under a fixed
key. A blob that no longer decodes is treated as absent.
"""
import logging
import sqlite3
from typing import Optional

from pydantic import ValidationError

from unitconv.db.dal import Database
from unitconv.models.rates import RateSnapshot
from .base import CacheError, RateCache

logger = logging.getLogger("unitconv.rates.cache")

DEFAULT_CACHE_KEY = "cached_exchange_rates"


def _decode(blob: Optional[str]) -> Optional[RateSnapshot]:
    if not blob:
        return None
    try:
        return RateSnapshot.model_validate_json(blob)
    except ValidationError:
        logger.warning("discarding undecodable cached rate snapshot")
        return None


class InMemoryRateCache(RateCache):
    """Keeps the serialized blob in memory; same encode/decode path as SQLite."""

    def __init__(self, snapshot: Optional[RateSnapshot] = None):
        self._blob: Optional[str] = snapshot.to_json() if snapshot else None
        self.saves = 0

    def load(self) -> Optional[RateSnapshot]:
        return _decode(self._blob)

    def save(self, snapshot: RateSnapshot) -> None:
        self._blob = snapshot.to_json()
        self.saves += 1

    def clear(self) -> None:
        self._blob = None


class SqliteRateCache(RateCache):
    def __init__(self, db: Database, key: str = DEFAULT_CACHE_KEY):
        self._db = db
        self._key = key

    def load(self) -> Optional[RateSnapshot]:
        try:
            blob = self._db.get_value(self._key)
        except sqlite3.Error as e:
            raise CacheError(f"failed to read cached rates: {e}") from e
        return _decode(blob)

    def save(self, snapshot: RateSnapshot) -> None:
        try:
            self._db.set_value(self._key, snapshot.to_json())
        except sqlite3.Error as e:
            raise CacheError(f"failed to persist rates: {e}") from e
        logger.debug("exchange rates cached")

    def clear(self) -> None:
        try:
            self._db.delete_value(self._key)
        except sqlite3.Error as e:
            raise CacheError(f"failed to clear cached rates: {e}") from e
