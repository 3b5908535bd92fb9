"""
Bundled catalog of wiki projects and frontend proxies.

Loaded from ``catalogs/projects.json`` once at first access and cached
for the process lifetime.

Usage::

    from mwprojects.core.data import get_bundled_catalog

    catalog = get_bundled_catalog()
    catalog.get_wiki_project("fandom.com")
"""

from __future__ import annotations

import logging
from pathlib import Path

from mwprojects.core.config.loader import load_catalog
from mwprojects.core.models.catalog import Catalog

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent

BUNDLED_CATALOG = _DATA_DIR / "catalogs" / "projects.json"

_catalog: Catalog | None = None


def get_bundled_catalog() -> Catalog:
    """Return the bundled catalog, loading it on first call.

    Concurrent first calls may each load the file; the last one is kept.
    """
    global _catalog  # noqa: PLW0603
    if _catalog is None:
        _catalog = load_catalog(BUNDLED_CATALOG)
        logger.debug("Bundled catalog cached from %s", BUNDLED_CATALOG)
    return _catalog
