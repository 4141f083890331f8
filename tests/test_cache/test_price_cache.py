"""Tests for PriceHistoryCache validity, replacement and bounds."""

import threading
from datetime import timedelta

import pytest

from conftest import T0, make_points
from cryptomap.cache import PriceHistoryCache
from cryptomap.ingestion.config import CacheConfig
from cryptomap.shared.models import CacheEntry, CacheKey, Timeframe

BTC_DAY = CacheKey("bitcoin", Timeframe.DAY)
BTC_WEEK = CacheKey("bitcoin", Timeframe.WEEK)


def entry(*prices, fetched_at=T0):
    return CacheEntry(points=make_points(*(prices or (1.0,))), fetched_at=fetched_at)


class TestValidity:
    @pytest.mark.parametrize("timeframe", list(Timeframe))
    def test_valid_just_inside_window(self, timeframe):
        now = T0 + timeframe.freshness_window - timedelta(seconds=1)
        assert PriceHistoryCache.is_valid(entry(), timeframe, now)

    @pytest.mark.parametrize("timeframe", list(Timeframe))
    def test_invalid_at_window_boundary(self, timeframe):
        now = T0 + timeframe.freshness_window
        assert not PriceHistoryCache.is_valid(entry(), timeframe, now)

    def test_same_age_differs_by_timeframe(self):
        now = T0 + timedelta(minutes=10)
        cached = entry()

        assert not PriceHistoryCache.is_valid(cached, Timeframe.DAY, now)
        assert PriceHistoryCache.is_valid(cached, Timeframe.WEEK, now)

    def test_get_returns_expired_entries(self):
        cache = PriceHistoryCache()
        cache.put(BTC_DAY, entry())

        # get ignores freshness; expired entries stay until replaced or purged
        assert cache.get(BTC_DAY) is not None


class TestWrites:
    def test_put_replaces_existing_entry(self):
        cache = PriceHistoryCache()
        cache.put(BTC_DAY, entry(1.0))

        newer = entry(2.0, fetched_at=T0 + timedelta(minutes=6))
        assert cache.put(BTC_DAY, newer) is True

        assert cache.get(BTC_DAY) is newer
        assert len(cache) == 1

    def test_older_write_is_ignored(self):
        cache = PriceHistoryCache()
        fresh = entry(2.0, fetched_at=T0 + timedelta(minutes=6))
        cache.put(BTC_DAY, fresh)

        assert cache.put(BTC_DAY, entry(1.0)) is False
        assert cache.get(BTC_DAY) is fresh

    def test_keys_are_independent(self):
        cache = PriceHistoryCache()
        day, week = entry(1.0), entry(7.0)
        cache.put(BTC_DAY, day)
        cache.put(BTC_WEEK, week)

        assert cache.get(BTC_DAY) is day
        assert cache.get(BTC_WEEK) is week
        assert CacheKey("ethereum", Timeframe.DAY) not in cache

    def test_concurrent_puts_keep_one_entry_per_key(self):
        cache = PriceHistoryCache()

        def writer(offset):
            for i in range(200):
                key = CacheKey(f"coin-{i % 10}", Timeframe.DAY)
                cache.put(key, entry(float(i), fetched_at=T0 + timedelta(seconds=offset + i)))

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 10


class TestBoundsAndPurge:
    def test_lru_bound_evicts_least_recently_used(self):
        cache = PriceHistoryCache(CacheConfig(max_entries=2))
        eth = CacheKey("ethereum", Timeframe.DAY)
        cache.put(BTC_DAY, entry())
        cache.put(BTC_WEEK, entry())

        cache.get(BTC_DAY)  # touch: BTC_WEEK is now the oldest
        cache.put(eth, entry())

        assert BTC_DAY in cache
        assert eth in cache
        assert BTC_WEEK not in cache

    def test_unbounded_when_max_entries_is_none(self):
        cache = PriceHistoryCache(CacheConfig(max_entries=None))
        for i in range(300):
            cache.put(CacheKey(f"coin-{i}", Timeframe.YEAR), entry())

        assert len(cache) == 300

    def test_rejects_non_positive_bound(self):
        with pytest.raises(ValueError):
            PriceHistoryCache(CacheConfig(max_entries=0))

    def test_purge_expired_keeps_fresh_entries(self):
        cache = PriceHistoryCache()
        cache.put(BTC_DAY, entry())
        cache.put(BTC_WEEK, entry())

        removed = cache.purge_expired(T0 + timedelta(minutes=10))

        assert removed == 1
        assert BTC_DAY not in cache
        assert BTC_WEEK in cache

    def test_clear(self):
        cache = PriceHistoryCache()
        cache.put(BTC_DAY, entry())
        cache.clear()
        assert len(cache) == 0
