"""
Response Cache Tests.
"""

import pytest

from dao_viewer import ResponseCache


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResponseCache(clock=clock)


class TestResponseCache:
    """Tests for TTL handling."""

    def test_put_and_get(self, cache):
        cache.put("k", "value", 10)

        assert cache.get("k") == "value"
        assert len(cache) == 1

    def test_expiry(self, cache, clock):
        cache.put("k", "value", 10)

        clock.now += 9
        assert cache.get("k") == "value"

        clock.now += 1
        assert cache.get("k") is None

    def test_none_not_stored(self, cache):
        cache.put("k", None, 10)

        assert len(cache) == 0

    def test_zero_ttl_not_stored(self, cache):
        cache.put("k", "value", 0)

        assert cache.get("k") is None

    def test_empty_list_is_cached(self, cache):
        cache.put("k", [], 10)

        assert cache.get("k") == []

    def test_purge_when_full(self, clock):
        cache = ResponseCache(max_entries=2, clock=clock)
        cache.put("a", 1, 5)
        cache.put("b", 2, 5)
        clock.now += 10

        cache.put("c", 3, 5)

        assert len(cache) == 1
        assert cache.get("c") == 3

    def test_oldest_evicted_when_all_fresh(self, clock):
        cache = ResponseCache(max_entries=2, clock=clock)
        cache.put(("details", "0"), "zero", 60)
        clock.now += 1
        cache.put(("details", "1"), "one", 60)
        clock.now += 1

        cache.put(("details", "2"), "two", 60)

        assert len(cache) == 2
        assert cache.get(("details", "0")) is None
        assert cache.get(("details", "1")) == "one"
        assert cache.get(("details", "2")) == "two"

    def test_stats(self, cache):
        cache.put("k", "value", 10)
        cache.get("k")
        cache.get("missing")

        stats = cache.get_stats()

        assert (stats["hits"], stats["misses"]) == (1, 1)
        assert stats["hit_rate_percent"] == 50.0

    def test_clear(self, cache):
        cache.put("k", "value", 10)
        cache.clear()

        assert len(cache) == 0


class TestGetOrFetch:
    """Tests for get_or_fetch."""

    @pytest.mark.asyncio
    async def test_fetches_once(self, cache):
        calls = []

        async def fetch():
            calls.append(1)
            return {"balance": 1}

        first = await cache.get_or_fetch(("treasury", "x"), 60, fetch)
        second = await cache.get_or_fetch(("treasury", "x"), 60, fetch)

        assert first == second == {"balance": 1}
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_absent_results_refetched(self, cache):
        calls = []

        async def fetch():
            calls.append(1)
            return None

        assert await cache.get_or_fetch("k", 60, fetch) is None
        assert await cache.get_or_fetch("k", 60, fetch) is None
        assert len(calls) == 2
