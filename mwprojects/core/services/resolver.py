"""
Catalog resolver — the memoized public surface.

A ``CatalogResolver`` owns one catalog (compiled once, at construction)
and the five caches of its operations.  Create one per process, or use
the module-level functions which delegate to ``get_resolver()``::

    from mwprojects import resolve_wiki_project

    result = resolve_wiki_project("https://minecraft.fandom.com/wiki/Creeper")
    result.full_script_path  # → "https://minecraft.fandom.com/"

Results that are models are returned as deep copies; two calls never
share a ``wiki_project`` / ``frontend_proxy`` object with each other or
with the catalog.
"""

from __future__ import annotations

import logging
from urllib.parse import ParseResult, SplitResult, urlsplit

from mwprojects.core.config.settings import ResolverSettings
from mwprojects.core.models.catalog import Catalog, FrontendProxy, WikiProject
from mwprojects.core.models.resolution import (
    FrontendProxyResolution,
    WikiProjectResolution,
)
from mwprojects.core.observability.metrics import MetricsRegistry
from mwprojects.core.services import projects, proxies
from mwprojects.core.services.cache import ResolverCache
from mwprojects.core.services.proxies import LinkFixer

logger = logging.getLogger(__name__)

ParsedURL = SplitResult | ParseResult


class CatalogResolver:
    """Resolves inputs against one catalog, memoizing every operation.

    Args:
        catalog: The catalog to resolve against.  It is never mutated.
        cache_size: Optional LRU bound per cache (None = unbounded).
        metrics: Registry for cache counters (a private one by default).
            Resolvers given the same registry report combined stats.
    """

    def __init__(
        self,
        catalog: Catalog,
        *,
        cache_size: int | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self.catalog = catalog
        self._projects = projects.compile_projects(catalog.wiki_projects)
        self._proxies = proxies.compile_proxies(catalog.frontend_proxies)
        self.cache = ResolverCache(max_size=cache_size, metrics=metrics)
        logger.debug(
            "Resolver ready: %d wiki projects, %d frontend proxies",
            len(self._projects), len(self._proxies),
        )

    @classmethod
    def from_settings(cls, settings: ResolverSettings | None = None) -> CatalogResolver:
        """Build a resolver from settings (environment by default)."""
        settings = settings or ResolverSettings.from_env()
        return cls(settings.load_catalog(), cache_size=settings.cache_size)

    @property
    def wiki_projects(self) -> tuple[WikiProject, ...]:
        return self.catalog.wiki_projects

    @property
    def frontend_proxies(self) -> tuple[FrontendProxy, ...]:
        return self.catalog.frontend_proxies

    # ── Wiki projects ───────────────────────────────────────────

    def resolve_wiki_project(self, text: str) -> WikiProjectResolution | None:
        """Find the wiki project of *text* and its full article/script paths."""
        result = self.cache["wiki_project"].get_or_compute(
            text, lambda: projects.resolve_wiki_project(self._projects, text),
        )
        return result.model_copy(deep=True) if result is not None else None

    def encode_id_string(self, url: ParsedURL | str) -> str | None:
        """Encode a wiki URL as the id string of its project."""
        parsed = urlsplit(url) if isinstance(url, str) else url
        # .hostname is lowercased; the regex has to see the same host
        userinfo, at, host = parsed.netloc.rpartition("@")
        parsed = parsed._replace(netloc=f"{userinfo}{at}{host.lower()}")
        href, hostname = parsed.geturl(), parsed.hostname or ""
        return self.cache["id_string"].get_or_compute(
            href, lambda: projects.encode_id_string(self._projects, href, hostname),
        )

    def decode_id_string(self, id_string: str, project_name: str) -> SplitResult | None:
        """Decode an id string of *project_name* into its script path URL."""
        result = self.cache["id_string_url"].get_or_compute(
            (id_string, project_name),
            lambda: projects.decode_id_string(self._projects, id_string, project_name),
        )
        return urlsplit(result) if result is not None else None

    # ── Frontend proxies ────────────────────────────────────────

    def resolve_frontend_proxy(self, text: str) -> FrontendProxyResolution | None:
        """Find the frontend proxy of *text* and its full name/article/script paths."""
        result = self.cache["frontend_proxy"].get_or_compute(
            text, lambda: proxies.resolve_frontend_proxy(self._proxies, text),
        )
        return result.model_copy(deep=True) if result is not None else None

    def link_fixer(self, url: str) -> LinkFixer | None:
        """Link fixer for the proxy serving *url* (``scheme://host/...``)."""
        parts = url.split("/")
        if len(parts) < 3:
            return None
        hostname = parts[2]
        return self.cache["link_fix"].get_or_compute(
            hostname, lambda: proxies.build_link_fixer(self._proxies, hostname),
        )

    # ── Cache management ────────────────────────────────────────

    def stats(self) -> dict[str, dict[str, int]]:
        """Per-cache entry, hit and miss counts."""
        return self.cache.to_dict()

    def clear_cache(self) -> None:
        self.cache.clear()


# ── Module-level singleton ───────────────────────────────────────

_resolver: CatalogResolver | None = None


def get_resolver() -> CatalogResolver:
    """Return the process-level resolver, building it on first call.

    The catalog comes from ``MWP_CATALOG`` when set, else the bundled one.
    """
    global _resolver  # noqa: PLW0603
    if _resolver is None:
        _resolver = CatalogResolver.from_settings()
    return _resolver


def set_resolver(resolver: CatalogResolver | None) -> None:
    """Replace the process-level resolver (None = rebuild on next use)."""
    global _resolver  # noqa: PLW0603
    _resolver = resolver


def resolve_wiki_project(text: str) -> WikiProjectResolution | None:
    return get_resolver().resolve_wiki_project(text)


def encode_id_string(url: ParsedURL | str) -> str | None:
    return get_resolver().encode_id_string(url)


def decode_id_string(id_string: str, project_name: str) -> SplitResult | None:
    return get_resolver().decode_id_string(id_string, project_name)


def resolve_frontend_proxy(text: str) -> FrontendProxyResolution | None:
    return get_resolver().resolve_frontend_proxy(text)


def link_fixer(url: str) -> LinkFixer | None:
    return get_resolver().link_fixer(url)
