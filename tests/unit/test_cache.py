"""Tests for the TTL cache."""

import threading

from app.catalog.cache import TTLCache


class TestTTLCache:
    def test_miss_returns_none(self, cache):
        assert cache.get("works/OL1W") is None

    def test_set_then_get(self, cache):
        cache.set("authors/OL1A", "Ursula K. Le Guin")
        assert cache.get("authors/OL1A") == "Ursula K. Le Guin"

    def test_empty_list_is_a_hit(self, cache):
        cache.set("search_title=zzz&page=1&limit=10", [])
        assert cache.get("search_title=zzz&page=1&limit=10") == []

    def test_entry_expires_after_ttl(self, cache, clock):
        cache.set("k", "v")
        clock.advance(59)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_expiry_is_absolute_not_sliding(self, cache, clock):
        cache.set("k", "v")
        for _ in range(5):
            clock.advance(10)
            assert cache.get("k") == "v"
        clock.advance(15)
        assert cache.get("k") is None

    def test_overwrite_resets_expiry(self, cache, clock):
        cache.set("k", "old")
        clock.advance(50)
        cache.set("k", "new")
        clock.advance(50)
        assert cache.get("k") == "new"

    def test_write_sweeps_expired_entries(self, cache, clock):
        for i in range(1000):
            cache.set(f"search_title=q{i}&page=1&limit=10", [])
        clock.advance(3600)

        cache.set("works/OL1W", "fresh")

        assert len(cache) == 1
        assert cache.get("works/OL1W") == "fresh"

    def test_sweep_keeps_live_entries(self, cache, clock):
        cache.set("old", 1)
        clock.advance(30)
        cache.set("young", 2)
        clock.advance(35)

        cache.set("new", 3)

        assert len(cache) == 2
        assert cache.get("young") == 2
        assert cache.get("old") is None

    def test_clear(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0

    def test_concurrent_sets(self):
        cache = TTLCache()

        def writer(start):
            for i in range(start, start + 200):
                cache.set(f"k{i}", i)

        threads = [threading.Thread(target=writer, args=(n * 200,)) for n in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 1000
        assert cache.get("k999") == 999
