"""
Catalog check use case — validate a catalog and report authoring issues.

Loading already rejects malformed entries and regexes.  On top of that
this checks what only shows up at resolution time: templates pointing
at groups that cannot exist, and entries that catalog order makes
unreachable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from mwprojects.core.config.loader import load_catalog
from mwprojects.core.errors import CatalogError
from mwprojects.core.models.catalog import Catalog
from mwprojects.core.services.templates import placeholders


@dataclass
class CatalogCheckResult:
    """Result of catalog validation."""

    valid: bool = False
    catalog: Catalog | None = None
    catalog_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "catalog_path": str(self.catalog_path) if self.catalog_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "wiki_project_count": len(self.catalog.wiki_projects) if self.catalog else 0,
            "frontend_proxy_count": len(self.catalog.frontend_proxies) if self.catalog else 0,
        }


def check_catalog(catalog_path: Path | None = None) -> CatalogCheckResult:
    """Validate a catalog file (or the bundled catalog) and report issues.

    Args:
        catalog_path: Catalog file to check; None checks the bundled one.

    Returns:
        CatalogCheckResult with validation status and any issues.
    """
    result = CatalogCheckResult(catalog_path=catalog_path)

    try:
        if catalog_path is None:
            from mwprojects.core.data import get_bundled_catalog

            catalog = get_bundled_catalog()
        else:
            catalog = load_catalog(catalog_path)
    except CatalogError as e:
        result.errors.append(str(e))
        return result

    result.catalog = catalog
    _check_templates(catalog, result)
    _check_order(catalog, result)

    if not catalog.wiki_projects:
        result.warnings.append("No wiki projects defined.")

    result.valid = not result.errors
    return result


def _check_templates(catalog: Catalog, result: CatalogCheckResult) -> None:
    """Flag ``$n`` placeholders that can never be filled."""
    for project in catalog.wiki_projects:
        groups = re.compile(project.regex).groups
        if project.regex_paths:
            for label, template in (
                ("articlePath", project.article_path),
                ("scriptPath", project.script_path),
            ):
                bad = [n for n in placeholders(template) if n > groups]
                if bad:
                    result.errors.append(
                        f"{project.name}: {label} references group(s) {bad} "
                        f"but the regex has {groups}"
                    )
        elif "$" in project.article_path + project.script_path:
            result.warnings.append(
                f"{project.name}: paths contain '$' but regexPaths is false"
            )

        if project.id_string is None:
            continue
        # scriptPaths[i] is used for ids of i + 1 tokens
        for i, template in enumerate(project.id_string.script_paths):
            bad = [n for n in placeholders(template) if not 1 <= n <= i + 1]
            if bad:
                result.errors.append(
                    f"{project.name}: scriptPaths[{i}] references token(s) {bad} "
                    f"but is used for {i + 1} token(s)"
                )

    for proxy in catalog.frontend_proxies:
        groups = re.compile(proxy.regex).groups
        for label, template in (
            ("namePath", proxy.name_path),
            ("articlePath", proxy.article_path),
            ("scriptPath", proxy.script_path),
        ):
            bad = [n for n in placeholders(template) if n > groups]
            if bad:
                result.errors.append(
                    f"{proxy.name}: {label} references group(s) {bad} "
                    f"but the regex has {groups}"
                )


def _check_order(catalog: Catalog, result: CatalogCheckResult) -> None:
    """Flag duplicates and entries shadowed by an earlier, broader name.

    Matching is first-suffix-wins in catalog order, so a later entry whose
    name ends with an earlier entry's name can never be selected.
    """
    for kind, names in (
        ("wiki project", [p.name for p in catalog.wiki_projects]),
        ("frontend proxy", [p.name for p in catalog.frontend_proxies]),
    ):
        for i, name in enumerate(names):
            for earlier in names[:i]:
                if name == earlier:
                    result.warnings.append(f"Duplicate {kind} name: {name}")
                    break
                if name.endswith(earlier):
                    result.warnings.append(
                        f"{kind.capitalize()} {name} is shadowed by earlier entry {earlier}"
                    )
                    break
