"""
mwprojects — resolve URLs against a catalog of MediaWiki projects and frontend proxies.

The public operations are re-exported here:

    from mwprojects import resolve_wiki_project, encode_id_string

    result = resolve_wiki_project("https://en.wikipedia.org/wiki/Main_Page")
    result.full_script_path  # → "https://en.wikipedia.org/w/"
"""

__version__ = "0.1.0"

from mwprojects.core.services.resolver import (  # noqa: E402
    CatalogResolver,
    decode_id_string,
    encode_id_string,
    get_resolver,
    link_fixer,
    resolve_frontend_proxy,
    resolve_wiki_project,
)

__all__ = [
    "CatalogResolver",
    "__version__",
    "decode_id_string",
    "encode_id_string",
    "get_resolver",
    "link_fixer",
    "resolve_frontend_proxy",
    "resolve_wiki_project",
]
