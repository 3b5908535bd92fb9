"""
Memoization for the resolver operations.

Each public operation gets its own ``KeyedCache``.  ``None`` results are
cached like any other value, so repeated misses are cheap too.

Thread safety:
    Every cache has its own lock, held only around dict access.  The
    value itself is computed outside the lock; two threads racing on the
    same cold key both compute and the last writer wins.

Growth:
    Caches are unbounded unless ``max_size`` is set, in which case the
    least recently used entry is evicted first.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

from mwprojects.core.observability.metrics import MetricsRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()

# One cache per public operation
CACHE_NAMES = (
    "wiki_project",
    "id_string",
    "id_string_url",
    "frontend_proxy",
    "link_fix",
)


class KeyedCache:
    """A keyed memo table with optional LRU bound."""

    def __init__(
        self,
        name: str,
        max_size: int | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        if max_size is not None and max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self.name = name
        self.max_size = max_size
        self._entries: OrderedDict[Hashable, Any] = OrderedDict()
        self._lock = threading.Lock()

        metrics = metrics or MetricsRegistry()
        self._hits = metrics.counter("hits", cache=name)
        self._misses = metrics.counter("misses", cache=name)
        self._size = metrics.gauge("entries", cache=name)

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        """Return the cached value for *key*, computing it on a miss.

        Exceptions raised by *compute* propagate and nothing is stored.
        """
        with self._lock:
            value = self._entries.get(key, _MISSING)
            if value is not _MISSING:
                self._entries.move_to_end(key)
                self._hits.inc()
                return value
            self._misses.inc()

        logger.debug("Cache miss in %s for %r", self.name, key)
        value = compute()

        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            if self.max_size is not None:
                while len(self._entries) > self.max_size:
                    self._entries.popitem(last=False)
            self._size.set(len(self._entries))
        return value

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def hits(self) -> int:
        return self._hits.value

    @property
    def misses(self) -> int:
        return self._misses.value

    def clear(self) -> None:
        """Drop every entry (counters are kept)."""
        with self._lock:
            self._entries.clear()
            self._size.set(0)


class ResolverCache:
    """The five independent caches owned by one resolver."""

    def __init__(
        self,
        max_size: int | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self.metrics = metrics or MetricsRegistry()
        self._caches = {
            name: KeyedCache(name, max_size=max_size, metrics=self.metrics)
            for name in CACHE_NAMES
        }

    def __getitem__(self, name: str) -> KeyedCache:
        return self._caches[name]

    def clear(self) -> None:
        """Empty every cache."""
        for cache in self._caches.values():
            cache.clear()

    def to_dict(self) -> dict[str, dict[str, int]]:
        """Per-cache ``hits``, ``misses`` and ``entries``, read from the metrics."""
        grouped = self.metrics.by_label("cache")
        return {name: grouped[name] for name in CACHE_NAMES}
