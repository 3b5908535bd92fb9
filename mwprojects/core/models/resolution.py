"""
Resolution results — transient values returned by the resolvers.

Never stored in the catalog.  ``to_dict()`` gives the camelCase shape
used by the CLI's JSON output.
"""

from __future__ import annotations

from pydantic import Field

from mwprojects.core.models.catalog import FrontendProxy, WikiProject, _CatalogModel


class WikiProjectResolution(_CatalogModel):
    """Concrete paths of the wiki an input belongs to."""

    full_article_path: str = Field(alias="fullArticlePath")
    full_script_path: str = Field(alias="fullScriptPath")
    wiki_project: WikiProject = Field(alias="wikiProject")


class FrontendProxyResolution(_CatalogModel):
    """Concrete paths of a wiki reached through a frontend proxy."""

    full_name_path: str = Field(alias="fullNamePath")
    full_article_path: str = Field(alias="fullArticlePath")
    full_script_path: str = Field(alias="fullScriptPath")
    frontend_proxy: FrontendProxy = Field(alias="frontendProxy")
