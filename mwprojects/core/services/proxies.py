"""
Frontend proxy matching, path resolution and link fixing.

Frontend proxies (BreezeWiki and friends) serve a wiki under their own
host.  Matching follows the same leading-segment rule as wiki projects,
but only the proxy's own ``regex`` is applied and every path is always a
``$n`` template.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from mwprojects.core.models.catalog import FrontendProxy
from mwprojects.core.models.resolution import FrontendProxyResolution
from mwprojects.core.services.projects import leading_segments_match
from mwprojects.core.services.templates import expand_template, match_values

logger = logging.getLogger(__name__)

LinkFixer = Callable[[str, str], str]

# ``https://host/$1`` splits into 4 segments; only longer name paths
# carry a prefix that relative links lose.
_MIN_FIXABLE_SEGMENTS = 5


@dataclass(frozen=True)
class CompiledProxy:
    """A frontend proxy with its regex compiled."""

    proxy: FrontendProxy
    pattern: re.Pattern[str]

    @classmethod
    def compile(cls, proxy: FrontendProxy) -> CompiledProxy:
        return cls(proxy=proxy, pattern=re.compile(proxy.regex))


def compile_proxies(proxies: Sequence[FrontendProxy]) -> list[CompiledProxy]:
    """Compile every proxy, keeping catalog order."""
    return [CompiledProxy.compile(p) for p in proxies]


def resolve_frontend_proxy(
    compiled: Sequence[CompiledProxy], text: str
) -> FrontendProxyResolution | None:
    """Resolve *text* against the proxy catalog.

    Returns:
        FrontendProxyResolution, or None if no proxy matches.

    Raises:
        TemplateError: If a path template references a missing group.
    """
    entry = next(
        (e for e in compiled if leading_segments_match(e.proxy.name, text)),
        None,
    )
    if entry is None:
        return None

    match = entry.pattern.search(text)
    if match is None:
        logger.debug("Proxy %s matched by name but not by regex: %r", entry.proxy.name, text)
        return None

    proxy = entry.proxy
    values = match_values(match)
    return FrontendProxyResolution(
        full_name_path=expand_template(proxy.name_path, values),
        full_article_path=expand_template(proxy.article_path, values),
        full_script_path=expand_template(proxy.script_path, values),
        frontend_proxy=proxy,
    )


def fix_link(href: str, pagelink: str, *, split_length: int) -> str:
    """Restore the path prefix a proxy strips from relative links.

    The first *split_length* ``/`` pieces of *pagelink* are kept; pieces
    3 up to the last of those (exclusive) form the prefix.

    >>> fix_link("/wiki/Foo", "https://breezewiki.com/minecraft/wiki/Bar", split_length=5)
    '/minecraft/wiki/Foo'
    """
    pieces = pagelink.split("/")[:split_length]
    return "/" + "/".join(pieces[3:-1]) + href


def build_link_fixer(
    compiled: Sequence[CompiledProxy], hostname: str
) -> LinkFixer | None:
    """Derive the link fixer for a proxy hostname.

    Args:
        compiled: Compiled proxies in priority order.
        hostname: Host part of a proxied URL.

    Returns:
        ``fix(href, pagelink) -> str``, or None when no proxy matches or
        its name path has no prefix to restore.
    """
    entry = next((e for e in compiled if hostname.endswith(e.proxy.name)), None)
    if entry is None:
        return None

    split_length = len(entry.proxy.name_path.split("/"))
    if split_length < _MIN_FIXABLE_SEGMENTS:
        return None
    return functools.partial(fix_link, split_length=split_length)
