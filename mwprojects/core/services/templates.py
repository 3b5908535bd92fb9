"""
``$n`` template expansion.

Catalog paths reference regex groups (or id string tokens) positionally:
``"https://$2.fandom.com/$1/"``.  Only single-digit placeholders exist.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from mwprojects.core.errors import TemplateError

_PLACEHOLDER = re.compile(r"\$(\d)")


def expand_template(
    template: str,
    values: Sequence[str | None],
    *,
    offset: int = 0,
) -> str:
    """Replace every ``$n`` in *template* with ``values[n - offset]``.

    Args:
        template: Template string from the catalog.
        values: Substitution values.  ``None`` (a group that did not take
            part in the match) expands to the empty string.
        offset: Number the first value is addressed by (``0`` for regex
            groups where ``$0`` is the whole match, ``1`` for token lists).

    Returns:
        The expanded string.

    Raises:
        TemplateError: If a placeholder points outside *values*.
    """

    def _replace(m: re.Match[str]) -> str:
        n = int(m.group(1))
        index = n - offset
        if not 0 <= index < len(values):
            raise TemplateError(template, n, len(values))
        return values[index] or ""

    return _PLACEHOLDER.sub(_replace, template)


def match_values(match: re.Match[str]) -> list[str | None]:
    """Whole match followed by every group, ready for ``expand_template``."""
    return [match.group(0), *match.groups()]


def placeholders(template: str) -> list[int]:
    """Indices referenced by *template*, in order of appearance."""
    return [int(n) for n in _PLACEHOLDER.findall(template)]
