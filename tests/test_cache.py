"""
Tests for the memoization layer — keyed caches and resolver caching.
"""

import threading

import pytest

from mwprojects.core.observability.metrics import MetricsRegistry
from mwprojects.core.services.cache import CACHE_NAMES, KeyedCache, ResolverCache
from mwprojects.core.services.resolver import CatalogResolver

# ── KeyedCache ───────────────────────────────────────────────────


class TestKeyedCache:
    def test_computes_once(self):
        cache = KeyedCache("test")
        calls = []

        def compute():
            calls.append(1)
            return "value"

        assert cache.get_or_compute("k", compute) == "value"
        assert cache.get_or_compute("k", compute) == "value"
        assert len(calls) == 1
        assert cache.hits == 1
        assert cache.misses == 1

    def test_none_is_cached(self):
        cache = KeyedCache("test")
        calls = []

        def compute():
            calls.append(1)
            return None

        assert cache.get_or_compute("k", compute) is None
        assert cache.get_or_compute("k", compute) is None
        assert len(calls) == 1
        assert "k" in cache

    def test_exception_not_cached(self):
        cache = KeyedCache("test")

        def boom():
            raise ValueError("bad data")

        with pytest.raises(ValueError):
            cache.get_or_compute("k", boom)
        assert "k" not in cache
        assert cache.get_or_compute("k", lambda: 1) == 1

    def test_tuple_keys(self):
        cache = KeyedCache("test")
        cache.get_or_compute(("7-3", "example.org"), lambda: "a")
        cache.get_or_compute(("7-3", "other.org"), lambda: "b")
        assert len(cache) == 2

    def test_unbounded_by_default(self):
        cache = KeyedCache("test")
        for i in range(500):
            cache.get_or_compute(i, lambda: i)
        assert len(cache) == 500

    def test_lru_eviction(self):
        cache = KeyedCache("test", max_size=2)
        cache.get_or_compute("a", lambda: 1)
        cache.get_or_compute("b", lambda: 2)
        cache.get_or_compute("a", lambda: 1)  # a becomes most recent
        cache.get_or_compute("c", lambda: 3)
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_invalid_max_size(self):
        with pytest.raises(ValueError):
            KeyedCache("test", max_size=0)

    def test_clear(self):
        cache = KeyedCache("test")
        cache.get_or_compute("a", lambda: 1)
        cache.clear()
        assert len(cache) == 0

    def test_metrics_recorded(self):
        metrics = MetricsRegistry()
        cache = KeyedCache("test", metrics=metrics)
        cache.get_or_compute("a", lambda: 1)
        cache.get_or_compute("a", lambda: 1)
        assert metrics.by_label("cache") == {"test": {"hits": 1, "misses": 1, "entries": 1}}

    def test_concurrent_access(self):
        cache = KeyedCache("test")
        results = []

        def worker():
            for i in range(200):
                results.append(cache.get_or_compute(i % 20, lambda i=i: (i % 20) * 2))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 20
        assert all(v % 2 == 0 for v in results)
        assert cache.hits + cache.misses == 800


# ── ResolverCache ────────────────────────────────────────────────


class TestResolverCache:
    def test_five_independent_caches(self):
        caches = ResolverCache()
        assert set(caches.to_dict()) == set(CACHE_NAMES)
        caches["wiki_project"].get_or_compute("x", lambda: 1)
        assert len(caches["wiki_project"]) == 1
        assert len(caches["frontend_proxy"]) == 0

    def test_same_key_different_caches(self):
        caches = ResolverCache()
        caches["wiki_project"].get_or_compute("https://x", lambda: "project")
        assert caches["frontend_proxy"].get_or_compute("https://x", lambda: "proxy") == "proxy"

    def test_clear_all(self):
        caches = ResolverCache()
        for name in CACHE_NAMES:
            caches[name].get_or_compute("k", lambda: 1)
        caches.clear()
        assert all(stats["entries"] == 0 for stats in caches.to_dict().values())


# ── Resolver integration ─────────────────────────────────────────


class TestResolverCaching:
    def test_resolution_cached(self, resolver: CatalogResolver):
        resolver.resolve_wiki_project("https://foo.wiki.example.org/wiki/X")
        resolver.resolve_wiki_project("https://foo.wiki.example.org/wiki/X")
        stats = resolver.stats()["wiki_project"]
        assert stats == {"entries": 1, "hits": 1, "misses": 1}

    def test_misses_cached(self, resolver: CatalogResolver):
        assert resolver.resolve_wiki_project("https://unknown.net/") is None
        assert resolver.resolve_wiki_project("https://unknown.net/") is None
        assert resolver.stats()["wiki_project"]["hits"] == 1

    def test_encode_keyed_by_href(self, resolver: CatalogResolver):
        resolver.encode_id_string("https://wiki7-3.example.org/w/index.php")
        resolver.encode_id_string("https://wiki7-3.example.org/w/api.php")
        assert resolver.stats()["id_string"]["entries"] == 2

    def test_cache_size_bound(self, sample_catalog):
        resolver = CatalogResolver(sample_catalog, cache_size=1)
        resolver.resolve_wiki_project("https://a.wiki.example.org/")
        resolver.resolve_wiki_project("https://b.wiki.example.org/")
        assert resolver.stats()["wiki_project"]["entries"] == 1

    def test_stats_come_from_metrics(self, sample_catalog):
        metrics = MetricsRegistry()
        resolver = CatalogResolver(sample_catalog, metrics=metrics)
        resolver.resolve_frontend_proxy("https://proxy.test/games")
        assert resolver.stats()["frontend_proxy"] == metrics.by_label("cache")["frontend_proxy"]
        assert metrics.counter("misses", cache="frontend_proxy").value == 1

    def test_shared_metrics_combine(self, sample_catalog):
        metrics = MetricsRegistry()
        first = CatalogResolver(sample_catalog, metrics=metrics)
        second = CatalogResolver(sample_catalog, metrics=metrics)
        first.resolve_wiki_project("https://query.test/")
        second.resolve_wiki_project("https://query.test/")
        assert first.stats()["wiki_project"]["misses"] == 2
        assert first.stats() == second.stats()

    def test_clear_cache(self, resolver: CatalogResolver):
        resolver.resolve_frontend_proxy("https://proxy.test/games")
        resolver.clear_cache()
        assert resolver.stats()["frontend_proxy"]["entries"] == 0

    def test_catalog_not_mutated(self, resolver: CatalogResolver, sample_catalog):
        before = sample_catalog.model_dump()
        resolver.resolve_wiki_project("https://foo.wiki.example.org/wiki/X")
        resolver.encode_id_string("https://wiki7-3.example.org/")
        resolver.decode_id_string("7-3", "example.org")
        resolver.resolve_frontend_proxy("https://proxy.test/games")
        resolver.link_fixer("https://proxy.test/games")
        assert sample_catalog.model_dump() == before
