"""
Error types shared across the core.

"Not found" is never an error: resolvers return ``None`` for inputs that
match no catalog entry.  The exceptions below are reserved for bad
catalog data.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Raised when a catalog file is missing, unreadable, or invalid."""


class ResolutionError(Exception):
    """Raised when a catalog entry cannot be applied to an input."""


class TemplateError(ResolutionError):
    """Raised when a ``$n`` placeholder references a missing value.

    Attributes:
        template: The template being expanded.
        index:    The placeholder index that was out of range.
        available: How many values were available for substitution.
    """

    def __init__(self, template: str, index: int, available: int) -> None:
        self.template = template
        self.index = index
        self.available = available
        super().__init__(
            f"Placeholder ${index} in {template!r} is out of range "
            f"({available} value(s) available)"
        )
