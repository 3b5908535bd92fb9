"""
Resolver settings — read from the environment.

    MWP_CATALOG     path to a catalog file (default: the bundled catalog)
    MWP_CACHE_SIZE  LRU bound per resolver cache (unset or 0: unbounded)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from mwprojects.core.config.loader import find_catalog_file, load_catalog
from mwprojects.core.errors import CatalogError
from mwprojects.core.models.catalog import Catalog

CACHE_SIZE_ENV_VAR = "MWP_CACHE_SIZE"


@dataclass(frozen=True)
class ResolverSettings:
    """How to build a ``CatalogResolver``."""

    catalog_path: Path | None = None
    cache_size: int | None = None

    @classmethod
    def from_env(
        cls,
        env: dict[str, str] | None = None,
        catalog_path: Path | None = None,
    ) -> ResolverSettings:
        """Read settings from *env* (default: ``os.environ``).

        An explicit *catalog_path* (e.g. the ``--catalog`` flag) wins
        over ``MWP_CATALOG``.

        Raises:
            CatalogError: If ``MWP_CACHE_SIZE`` is not a non-negative integer.
        """
        if env is None:
            env = dict(os.environ)

        raw_size = env.get(CACHE_SIZE_ENV_VAR, "").strip()
        try:
            cache_size = int(raw_size) if raw_size else 0
        except ValueError as e:
            raise CatalogError(f"{CACHE_SIZE_ENV_VAR} must be an integer, got {raw_size!r}") from e
        if cache_size < 0:
            raise CatalogError(f"{CACHE_SIZE_ENV_VAR} must not be negative, got {cache_size}")

        return cls(
            catalog_path=find_catalog_file(catalog_path, env),
            cache_size=cache_size or None,
        )

    def load_catalog(self) -> Catalog:
        """Load the configured catalog, or the bundled one."""
        if self.catalog_path is None:
            from mwprojects.core.data import get_bundled_catalog

            return get_bundled_catalog()
        return load_catalog(self.catalog_path)
