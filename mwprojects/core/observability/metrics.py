"""
Metrics — in-process cache statistics.

Every ``KeyedCache`` registers three metrics labelled with its cache
name: ``hits`` and ``misses`` counters and an ``entries`` gauge.
``MetricsRegistry.by_label("cache")`` folds them back into the
per-cache mapping that ``CatalogResolver.stats()`` returns::

    {"wiki_project": {"hits": 3, "misses": 1, "entries": 1}, ...}

Resolvers sharing one registry share (and sum into) the same metrics.
"""

from __future__ import annotations

from dataclasses import dataclass, field

Labels = tuple[tuple[str, str], ...]


@dataclass
class Counter:
    """Events seen so far; only goes up."""

    name: str
    labels: dict[str, str] = field(default_factory=dict)
    value: int = 0

    def inc(self, n: int = 1) -> None:
        self.value += n


@dataclass
class Gauge:
    """Last observed size."""

    name: str
    labels: dict[str, str] = field(default_factory=dict)
    value: int = 0

    def set(self, v: int) -> None:
        self.value = v


Metric = Counter | Gauge


class MetricsRegistry:
    """Get-or-create store of counters and gauges, keyed by name + labels."""

    def __init__(self) -> None:
        self._metrics: dict[tuple[str, Labels], Metric] = {}

    def counter(self, name: str, **labels: str) -> Counter:
        return self._get_or_create(Counter, name, labels)

    def gauge(self, name: str, **labels: str) -> Gauge:
        return self._get_or_create(Gauge, name, labels)

    def _get_or_create(self, kind: type, name: str, labels: dict[str, str]):
        key = (name, tuple(sorted(labels.items())))
        metric = self._metrics.get(key)
        if metric is None:
            metric = self._metrics[key] = kind(name=name, labels=labels)
        elif not isinstance(metric, kind):
            raise TypeError(
                f"Metric {name!r} {labels} is a {type(metric).__name__}, not a {kind.__name__}"
            )
        return metric

    def by_label(self, label: str) -> dict[str, dict[str, int]]:
        """Group metric values by one label.

        Returns:
            ``{label_value: {metric_name: value}}`` in registration order.
            Metrics without *label* are left out.
        """
        grouped: dict[str, dict[str, int]] = {}
        for metric in self._metrics.values():
            group = metric.labels.get(label)
            if group is not None:
                grouped.setdefault(group, {})[metric.name] = metric.value
        return grouped
