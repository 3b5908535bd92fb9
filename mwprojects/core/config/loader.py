"""
Catalog loader — reads a catalog file into domain models.

Catalog files are YAML or JSON mappings with two ordered lists::

    wikiProjects:
      - name: wikipedia.org
        regex: "^(?:https?:)?//(([a-z\\d-]{1,50})\\.wikipedia\\.org)"
        articlePath: /wiki/
        scriptPath: /w/
    frontendProxies: []

The raw data is validated against the Pydantic models, which fill in the
schema defaults and compile every regex.  A bad entry fails the whole
load rather than the first lookup that reaches it.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from mwprojects.core.errors import CatalogError
from mwprojects.core.models.catalog import Catalog

logger = logging.getLogger(__name__)

# Environment variable naming an alternative catalog file
CATALOG_ENV_VAR = "MWP_CATALOG"


def find_catalog_file(explicit: Path | None = None, env: dict[str, str] | None = None) -> Path | None:
    """Pick the catalog file to load.

    Args:
        explicit: Path given on the command line, if any.
        env: Environment mapping (default: ``os.environ``).

    Returns:
        The explicit path, else ``$MWP_CATALOG``, else None (meaning the
        bundled catalog).
    """
    if explicit is not None:
        return explicit
    if env is None:
        env = dict(os.environ)
    value = env.get(CATALOG_ENV_VAR, "").strip()
    return Path(value) if value else None


def parse_catalog(data: object, source: str = "<data>") -> Catalog:
    """Validate already-parsed catalog data.

    Raises:
        CatalogError: If the data is not a mapping or fails validation.
    """
    if not isinstance(data, dict):
        raise CatalogError(f"Expected a mapping in {source}, got {type(data).__name__}")

    try:
        catalog = Catalog.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog in {source}: {e}") from e

    logger.info(
        "Loaded catalog from %s: %d wiki projects, %d frontend proxies",
        source, len(catalog.wiki_projects), len(catalog.frontend_proxies),
    )
    return catalog


def load_catalog(path: Path) -> Catalog:
    """Load and validate a catalog file.

    Args:
        path: Path to a ``.json``, ``.yml`` or ``.yaml`` catalog.

    Returns:
        Validated Catalog model.

    Raises:
        CatalogError: If the file is missing, unreadable, or invalid.
    """
    if not path.is_file():
        raise CatalogError(f"Catalog file not found: {path}")

    logger.debug("Loading catalog from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"Cannot read {path}: {e}") from e

    if path.suffix == ".json":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise CatalogError(f"Invalid YAML in {path}: {e}") from e

    return parse_catalog(data, source=str(path))
