"""
Wiki project matching, path resolution and the id string codec.

These are the uncached building blocks; ``CatalogResolver`` wraps them
with memoization.  Patterns are compiled once per catalog entry by
``CompiledProject.compile``.

Matching rule (shared with the frontend proxies):
    The first entry, in catalog order, whose ``name`` is a suffix of any
    of the first three ``/``-separated segments of the input wins.  For a
    URL those segments are the scheme, the empty string, and the host.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from mwprojects.core.models.catalog import IdDirection, WikiProject
from mwprojects.core.models.resolution import WikiProjectResolution
from mwprojects.core.services.templates import expand_template, match_values

logger = logging.getLogger(__name__)


def leading_segments_match(name: str, text: str) -> bool:
    """Whether *name* ends any of the first three ``/`` segments of *text*."""
    return any(part.endswith(name) for part in text.split("/")[:3])


def strip_query(path: str) -> str:
    """``/index.php?title=`` → ``/index.php``."""
    return path.split("?")[0]


@dataclass(frozen=True)
class CompiledProject:
    """A wiki project with its patterns compiled.

    Attributes:
        project:      The catalog entry.
        pattern:      The project ``regex`` on its own.
        path_pattern: The project ``regex`` followed by the article path,
                      the script path, or an optional trailing slash.
        id_pattern:   The id string regex, when the project has one.
    """

    project: WikiProject
    pattern: re.Pattern[str]
    path_pattern: re.Pattern[str]
    id_pattern: re.Pattern[str] | None = None

    @classmethod
    def compile(cls, project: WikiProject) -> CompiledProject:
        if project.regex_paths:
            article = script = "/"
        else:
            article = re.escape(strip_query(project.article_path))
            script = re.escape(project.script_path)
        id_string = project.id_string
        return cls(
            project=project,
            pattern=re.compile(project.regex),
            path_pattern=re.compile(f"{project.regex}(?:{article}|{script}|/?$)"),
            id_pattern=re.compile(id_string.regex) if id_string else None,
        )


def compile_projects(projects: Sequence[WikiProject]) -> list[CompiledProject]:
    """Compile every project, keeping catalog order."""
    return [CompiledProject.compile(p) for p in projects]


# ── Project matching & paths ────────────────────────────────────


def find_project(
    compiled: Sequence[CompiledProject], text: str
) -> CompiledProject | None:
    """First project whose name ends one of the leading segments of *text*."""
    for entry in compiled:
        if leading_segments_match(entry.project.name, text):
            return entry
    return None


def resolve_wiki_project(
    compiled: Sequence[CompiledProject], text: str
) -> WikiProjectResolution | None:
    """Resolve *text* (a URL or path fragment) to its wiki's full paths.

    Args:
        compiled: Compiled catalog entries in priority order.
        text: Arbitrary input string.

    Returns:
        WikiProjectResolution, or None if no entry matches.

    Raises:
        TemplateError: If a ``regexPaths`` template references a group
            the project regex does not have.
    """
    entry = find_project(compiled, text)
    if entry is None:
        logger.debug("No wiki project name matches %r", text)
        return None

    project = entry.project
    match = entry.path_pattern.search(text)
    if match is None:
        logger.debug("Wiki project %s matched by name but not by regex: %r", project.name, text)
        return None

    if project.regex_paths:
        values = match_values(match)
        article_path = expand_template(project.article_path, values)
        script_path = expand_template(project.script_path, values)
    else:
        article_path = strip_query(project.article_path)
        script_path = project.script_path

    host = match.group(1) or ""
    return WikiProjectResolution(
        full_article_path=f"https://{host}{article_path}",
        full_script_path=f"https://{host}{script_path}",
        wiki_project=project,
    )


# ── Id string codec ─────────────────────────────────────────────


def encode_id_string(
    compiled: Sequence[CompiledProject], href: str, hostname: str
) -> str | None:
    """Turn a wiki URL into the id string of its project.

    The project regex is applied to the full URL.  Group 1 is the
    hostname and is skipped; every later group that took part in the
    match becomes one token.  ``desc`` projects reverse the tokens.

    Args:
        compiled: Compiled catalog entries in priority order.
        href: The full URL string.
        hostname: The URL's hostname, matched against project names.

    Returns:
        The id string, or None if no project or no groups matched.
    """
    entry = next(
        (
            e for e in compiled
            if e.project.id_string is not None and hostname.endswith(e.project.name)
        ),
        None,
    )
    if entry is None:
        return None

    match = entry.pattern.search(href)
    if match is None:
        return None

    tokens = [g for g in match.groups()[1:] if g is not None]
    if not tokens:
        return None

    id_string = entry.project.id_string
    assert id_string is not None  # filtered above
    if id_string.direction == IdDirection.DESC:
        tokens.reverse()
    return id_string.separator.join(tokens)


def decode_id_string(
    compiled: Sequence[CompiledProject], id_string: str, project_name: str
) -> str | None:
    """Turn an id string back into the script path URL of its wiki.

    Tokens substitute ``$1``, ``$2``, … in split order.  They are NOT
    reversed for ``desc`` projects: their ``scriptPaths`` templates are
    written against the id string's own token order.

    Args:
        compiled: Compiled catalog entries in priority order.
        id_string: The id string to decode.
        project_name: Exact name of the project it belongs to.

    Returns:
        The URL string, or None if the project is unknown, the id string
        does not match, or it has more tokens than there are templates.

    Raises:
        TemplateError: If the chosen template references a missing token.
    """
    entry = next(
        (
            e for e in compiled
            if e.id_pattern is not None and e.project.name == project_name
        ),
        None,
    )
    if entry is None:
        return None

    id_format = entry.project.id_string
    assert id_format is not None and entry.id_pattern is not None
    match = entry.id_pattern.fullmatch(id_string)
    if match is None or match.group(1) is None:
        return None

    tokens = match.group(1).split(id_format.separator)
    if len(tokens) > len(id_format.script_paths):
        return None
    return expand_template(id_format.script_paths[len(tokens) - 1], tokens, offset=1)
