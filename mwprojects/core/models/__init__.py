"""
Domain models — Pydantic types for the catalog and resolution results.

All models are re-exported here for convenient access:

    from mwprojects.core.models import Catalog, WikiProject, FrontendProxy
"""

from mwprojects.core.models.catalog import (
    Catalog,
    Extension,
    FrontendProxy,
    IdDirection,
    IdString,
    WikiFarm,
    WikiProject,
)
from mwprojects.core.models.resolution import (
    FrontendProxyResolution,
    WikiProjectResolution,
)

__all__ = [
    # catalog.py
    "Catalog",
    "Extension",
    "FrontendProxy",
    # resolution.py
    "FrontendProxyResolution",
    "IdDirection",
    "IdString",
    "WikiFarm",
    "WikiProject",
    "WikiProjectResolution",
]
