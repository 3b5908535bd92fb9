"""
Catalog models — wiki projects and frontend proxies.

A catalog is an ordered list of wiki project descriptors plus an ordered
list of frontend proxy descriptors.  Order is significant: resolvers pick
the FIRST entry whose name matches, so more specific entries must be
authored before broader ones.

All models are frozen.  Catalog files keep their camelCase keys
(``articlePath``, ``idString``, …); Python code uses the snake_case names.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WikiFarm(StrEnum):
    """Known wiki farms."""

    BILIGAME = "biligame"
    FANDOM = "fandom"
    HUIJIWIKI = "huijiwiki"
    MIRAHEZE = "miraheze"
    SHOUTWIKI = "shoutwiki"
    WIKI_GG = "wiki.gg"
    WIKIMEDIA = "wikimedia"


class Extension(StrEnum):
    """Extensions providing useful API endpoints."""

    CARGO = "Cargo"
    CENTRAL_AUTH = "CentralAuth"
    OAUTH = "OAuth"


class IdDirection(StrEnum):
    """Order in which extra regex groups are chained into an id string."""

    ASC = "asc"
    DESC = "desc"


def _check_pattern(value: str, min_groups: int = 0) -> str:
    """Reject patterns that do not compile or lack required groups."""
    try:
        compiled = re.compile(value)
    except re.error as e:
        raise ValueError(f"invalid regex {value!r}: {e}") from e
    if compiled.groups < min_groups:
        raise ValueError(
            f"regex {value!r} needs at least {min_groups} capture group(s)"
        )
    return value


class _CatalogModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_dict(self) -> dict:
        """Serialize with the catalog's camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


class IdString(_CatalogModel):
    """How a multi-wiki host turns its URLs into id strings and back.

    Attributes:
        separator:    Joins (and splits) the id string tokens.
        direction:    ``desc`` reverses the regex groups before joining.
        regex:        Matches a whole id string; group 1 is the id itself.
        script_paths: URL templates indexed by token count - 1.
    """

    separator: str = Field(default=".", min_length=1)
    direction: IdDirection = IdDirection.DESC
    regex: str
    script_paths: tuple[str, ...] = Field(alias="scriptPaths", min_length=1)

    @field_validator("regex")
    @classmethod
    def check_regex(cls, value: str) -> str:
        return _check_pattern(value, min_groups=1)


class WikiProject(_CatalogModel):
    """A MediaWiki installation or installation family.

    ``regex`` group 1 must yield the canonical hostname (optionally with a
    path prefix).  When ``regex_paths`` is set, ``article_path`` and
    ``script_path`` are ``$n`` templates over the regex groups.
    """

    name: str
    regex: str
    article_path: str = Field(alias="articlePath")
    script_path: str = Field(alias="scriptPath")
    full_script_path: str | None = Field(default=None, alias="fullScriptPath")
    id_string: IdString | None = Field(default=None, alias="idString")
    regex_paths: bool = Field(default=False, alias="regexPaths")
    wiki_farm: WikiFarm | None = Field(default=None, alias="wikiFarm")
    extensions: tuple[Extension, ...] = ()
    url_space_replacement: str = Field(default="_", alias="urlSpaceReplacement")
    note: str | None = None

    @field_validator("regex")
    @classmethod
    def check_regex(cls, value: str) -> str:
        return _check_pattern(value, min_groups=1)

    @property
    def is_multi_wiki(self) -> bool:
        """Whether the host serves several wikis told apart by id strings."""
        return self.id_string is not None

    def has_extension(self, extension: Extension | str) -> bool:
        """Check if the project advertises an API-providing extension."""
        return extension in self.extensions


class FrontendProxy(_CatalogModel):
    """A caching / reverse-proxy front for one or more wikis.

    All three paths are ``$n`` templates over the groups of ``regex``.
    """

    name: str
    regex: str
    name_path: str = Field(alias="namePath")
    article_path: str = Field(alias="articlePath")
    script_path: str = Field(alias="scriptPath")

    @field_validator("regex")
    @classmethod
    def check_regex(cls, value: str) -> str:
        return _check_pattern(value)


class Catalog(_CatalogModel):
    """The full, ordered catalog consumed by the resolvers."""

    wiki_projects: tuple[WikiProject, ...] = Field(default=(), alias="wikiProjects")
    frontend_proxies: tuple[FrontendProxy, ...] = Field(default=(), alias="frontendProxies")

    def get_wiki_project(self, name: str) -> WikiProject | None:
        """Look up a wiki project by exact name."""
        for project in self.wiki_projects:
            if project.name == name:
                return project
        return None

    def get_frontend_proxy(self, name: str) -> FrontendProxy | None:
        """Look up a frontend proxy by exact name."""
        for proxy in self.frontend_proxies:
            if proxy.name == name:
                return proxy
        return None

    def projects_by_farm(self, farm: WikiFarm | str | None) -> list[WikiProject]:
        """Get all wiki projects belonging to a farm (``None`` = independent)."""
        return [p for p in self.wiki_projects if p.wiki_farm == farm]
