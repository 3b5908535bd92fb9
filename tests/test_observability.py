"""
Tests for observability — metrics and logging setup.
"""

import logging
from pathlib import Path

import pytest

from mwprojects.core.observability.logging_config import setup_logging
from mwprojects.core.observability.metrics import Counter, Gauge, MetricsRegistry


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


# ── Metrics Tests ────────────────────────────────────────────────────


class TestCounter:
    def test_increment(self):
        c = Counter(name="hits")
        c.inc()
        c.inc(5)
        assert c.value == 6


class TestGauge:
    def test_set(self):
        g = Gauge(name="entries")
        g.set(42)
        g.set(7)
        assert g.value == 7


class TestMetricsRegistry:
    def test_get_or_create(self):
        reg = MetricsRegistry()
        c1 = reg.counter("hits", cache="wiki_project")
        c2 = reg.counter("hits", cache="wiki_project")
        assert c1 is c2

    def test_labels_distinguish(self):
        reg = MetricsRegistry()
        a = reg.counter("hits", cache="wiki_project")
        b = reg.counter("hits", cache="frontend_proxy")
        assert a is not b

    def test_kind_mismatch(self):
        reg = MetricsRegistry()
        reg.counter("entries", cache="link_fix")
        with pytest.raises(TypeError, match="Counter"):
            reg.gauge("entries", cache="link_fix")

    def test_by_label(self):
        reg = MetricsRegistry()
        reg.counter("hits", cache="wiki_project").inc(3)
        reg.counter("misses", cache="wiki_project").inc()
        reg.gauge("entries", cache="link_fix").set(2)
        reg.counter("loads").inc()
        assert reg.by_label("cache") == {
            "wiki_project": {"hits": 3, "misses": 1},
            "link_fix": {"entries": 2},
        }

    def test_by_label_empty(self):
        assert MetricsRegistry().by_label("cache") == {}


# ── Logging Tests ────────────────────────────────────────────────────


class TestSetupLogging:
    def test_default_level(self, restore_root_logger):
        setup_logging()
        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 1

    def test_debug_level(self, restore_root_logger):
        setup_logging("debug")
        assert restore_root_logger.level == logging.DEBUG

    def test_unknown_level_falls_back(self, restore_root_logger):
        setup_logging("LOUD")
        assert restore_root_logger.level == logging.WARNING

    def test_repeated_setup_replaces_handlers(self, restore_root_logger):
        setup_logging("INFO")
        setup_logging("INFO")
        assert len(restore_root_logger.handlers) == 1

    def test_log_file(self, restore_root_logger, tmp_path: Path):
        log_file = tmp_path / "mwprojects.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        assert restore_root_logger.level == logging.DEBUG

        logging.getLogger("mwprojects.test").debug("catalog loaded")
        for handler in restore_root_logger.handlers:
            handler.flush()
        assert "catalog loaded" in log_file.read_text()
