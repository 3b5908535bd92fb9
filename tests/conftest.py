"""
Shared test fixtures and configuration.
"""

import json
from pathlib import Path

import pytest

from mwprojects.core.config.loader import parse_catalog
from mwprojects.core.models import Catalog
from mwprojects.core.services.resolver import CatalogResolver, set_resolver

# A small catalog covering every resolution branch:
#   wiki.example.org  literal paths
#   example.org       asc id strings with one or two groups
#   farm.test         desc id strings, templates in id string order
#   naive.test        desc id strings, templates in regex group order
#   paths.test        regexPaths templates
#   query.test        article path with a query suffix
SAMPLE_CATALOG = {
    "wikiProjects": [
        {
            "name": "wiki.example.org",
            "regex": "^https?://([a-z0-9-]+\\.wiki\\.example\\.org)",
            "articlePath": "/wiki/",
            "scriptPath": "/w/",
            "regexPaths": False,
        },
        {
            "name": "example.org",
            "regex": "^https?://(wiki([0-9]+)(?:-([0-9]+))?\\.example\\.org)",
            "articlePath": "/wiki/",
            "scriptPath": "/w/",
            "idString": {
                "separator": "-",
                "direction": "asc",
                "regex": "([0-9]+(?:-[0-9]+)?)",
                "scriptPaths": [
                    "https://wiki$1.example.org/w/index.php",
                    "https://wiki$1-$2.example.org/w/index.php",
                ],
            },
        },
        {
            "name": "farm.test",
            "regex": "^https?://(([a-z]+)\\.farm\\.test(?:/([a-z]{2})(?=/|$))?)",
            "articlePath": "/wiki/",
            "scriptPath": "/",
            "idString": {
                "separator": ".",
                "direction": "desc",
                "regex": "((?:[a-z]{2}\\.)?[a-z]+)",
                "scriptPaths": [
                    "https://$1.farm.test/",
                    "https://$2.farm.test/$1/",
                ],
            },
            "wikiFarm": "fandom",
        },
        {
            "name": "naive.test",
            "regex": "^https?://(([a-z]+)\\.naive\\.test(?:/([a-z]{2})(?=/|$))?)",
            "articlePath": "/wiki/",
            "scriptPath": "/",
            "idString": {
                "separator": ".",
                "direction": "desc",
                "regex": "((?:[a-z]{2}\\.)?[a-z]+)",
                "scriptPaths": [
                    "https://$1.naive.test/",
                    "https://$1.naive.test/$2/",
                ],
            },
        },
        {
            "name": "paths.test",
            "regex": "^https?://(paths\\.test)/([a-z]+)",
            "articlePath": "/$2/wiki/",
            "scriptPath": "/$2/w/",
            "regexPaths": True,
        },
        {
            "name": "query.test",
            "regex": "^https?://(query\\.test)",
            "articlePath": "/index.php?title=",
            "scriptPath": "/",
            "extensions": ["Cargo"],
            "note": "Uses query-style article URLs.",
        },
    ],
    "frontendProxies": [
        {
            "name": "proxy.test",
            "regex": "^https?://proxy\\.test/([a-z]+)(?=/|$)",
            "namePath": "https://proxy.test/$1/",
            "articlePath": "https://proxy.test/$1/wiki/",
            "scriptPath": "https://$1.farm.test/",
        },
        {
            "name": "short.test",
            "regex": "^https?://short\\.test/([a-z]+)",
            "namePath": "https://short.test/$1",
            "articlePath": "https://short.test/$1/wiki/",
            "scriptPath": "https://$1.farm.test/",
        },
    ],
}


@pytest.fixture(autouse=True)
def reset_default_resolver():
    """Keep the process-level resolver from leaking between tests."""
    set_resolver(None)
    yield
    set_resolver(None)


@pytest.fixture
def sample_data() -> dict:
    """A fresh copy of the raw sample catalog."""
    return json.loads(json.dumps(SAMPLE_CATALOG))


@pytest.fixture
def sample_catalog(sample_data: dict) -> Catalog:
    return parse_catalog(sample_data)


@pytest.fixture
def resolver(sample_catalog: Catalog) -> CatalogResolver:
    return CatalogResolver(sample_catalog)


@pytest.fixture
def catalog_file(tmp_path: Path, sample_data: dict) -> Path:
    """The sample catalog written as JSON."""
    path = tmp_path / "projects.json"
    path.write_text(json.dumps(sample_data))
    return path
