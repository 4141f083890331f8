"""
In-memory price-history cache.

One entry per (coin_id, timeframe). Validity is a pure function of the
entry's age against the timeframe's freshness window; expired entries are
kept so they can be served as a stale fallback. Nothing is evicted in the
background: entries are replaced by fresher writes, dropped by the optional
LRU bound when a write overflows it, or removed by an explicit purge.
"""

import threading
from collections import OrderedDict
from datetime import datetime

from cryptomap.infrastructure.observability import get_cache_logger
from cryptomap.ingestion.config.value_objects import CacheConfig
from cryptomap.shared.models.enums import Timeframe
from cryptomap.shared.models.prices import CacheEntry, CacheKey

log = get_cache_logger()


class PriceHistoryCache:
    """
    Thread-safe keyed store of CacheEntry objects.

    Usage:
        cache = PriceHistoryCache(CacheConfig(max_entries=256))
        cache.put(key, CacheEntry(points, fetched_at=now))
        entry = cache.get(key)
        if entry and cache.is_valid(entry, key.timeframe, now): ...
    """

    def __init__(self, config: CacheConfig | None = None):
        self.config = config or CacheConfig()
        if self.config.max_entries is not None and self.config.max_entries < 1:
            raise ValueError("max_entries must be positive or None")
        self._entries: OrderedDict[CacheKey, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    # ---------- public ----------

    def get(self, key: CacheKey) -> CacheEntry | None:
        """Return the entry for `key`, valid or not, or None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._entries.move_to_end(key)
            return entry

    def put(self, key: CacheKey, entry: CacheEntry) -> bool:
        """
        Store `entry` under `key`, replacing any previous entry.

        A write older than the stored entry is ignored so a late, superseded
        fetch cannot clobber fresher data.

        Returns:
            True if the entry was stored
        """
        with self._lock:
            current = self._entries.get(key)
            if current is not None and entry.fetched_at < current.fetched_at:
                log.info(
                    "stale_write_ignored",
                    key=str(key),
                    incoming=entry.fetched_at.isoformat(),
                    stored=current.fetched_at.isoformat(),
                )
                return False

            self._entries[key] = entry
            self._entries.move_to_end(key)
            evicted = self._enforce_bound()

        log.debug("entry_stored", key=str(key), points=len(entry.points))
        for old_key in evicted:
            log.info("entry_evicted", key=str(old_key), reason="max_entries")
        return True

    @staticmethod
    def is_valid(entry: CacheEntry, timeframe: Timeframe, now: datetime) -> bool:
        """True iff the entry is younger than the timeframe's freshness window."""
        return entry.age(now) < timeframe.freshness_window

    def purge_expired(self, now: datetime) -> int:
        """Remove every entry past its freshness window; returns the count."""
        with self._lock:
            expired = [
                key
                for key, entry in self._entries.items()
                if not self.is_valid(entry, key.timeframe, now)
            ]
            for key in expired:
                del self._entries[key]

        if expired:
            log.info("expired_entries_purged", count=len(expired))
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    # ---------- internal ----------

    def _enforce_bound(self) -> list[CacheKey]:
        limit = self.config.max_entries
        evicted: list[CacheKey] = []
        if limit is None:
            return evicted
        while len(self._entries) > limit:
            old_key, _ = self._entries.popitem(last=False)
            evicted.append(old_key)
        return evicted
