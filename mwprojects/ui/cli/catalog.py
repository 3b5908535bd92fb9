"""
CLI commands for the catalog itself.

Thin wrappers over ``mwprojects.core.use_cases.catalog_check`` and the
catalog models.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


def _catalog_path(ctx: click.Context) -> Path | None:
    """Resolve the catalog file from the --catalog flag or $MWP_CATALOG."""
    from mwprojects.core.config.loader import find_catalog_file

    return find_catalog_file(ctx.obj.get("catalog_path"))


@click.group("catalog")
def catalog() -> None:
    """Catalog — validate and inspect wiki projects and proxies."""


@catalog.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Validate the catalog and report authoring issues."""
    from mwprojects.core.use_cases.catalog_check import check_catalog

    result = check_catalog(_catalog_path(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    source = str(result.catalog_path) if result.catalog_path else "bundled catalog"
    if result.valid:
        assert result.catalog is not None  # guaranteed when valid
        click.secho("✅ Catalog is valid", fg="green", bold=True)
        click.echo(f"   Source: {source}")
        click.echo(f"   Wiki projects: {len(result.catalog.wiki_projects)}")
        click.echo(f"   Frontend proxies: {len(result.catalog.frontend_proxies)}")
    else:
        click.secho(f"❌ Catalog errors ({source}):", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


@catalog.command("list")
@click.option("--farm", default=None, help="Only projects of this wiki farm ('none' = independent).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_projects(ctx: click.Context, farm: str | None, as_json: bool) -> None:
    """List wiki projects in catalog (priority) order."""
    from mwprojects.core.config.settings import ResolverSettings
    from mwprojects.core.errors import CatalogError

    try:
        loaded = ResolverSettings(catalog_path=_catalog_path(ctx)).load_catalog()
    except CatalogError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    projects = list(loaded.wiki_projects)
    if farm is not None:
        projects = loaded.projects_by_farm(None if farm == "none" else farm)

    if as_json:
        click.echo(json.dumps([p.to_dict() for p in projects], indent=2))
        return

    if not projects:
        click.echo("   No wiki projects.")
        return

    for project in projects:
        farm_label = f" [{project.wiki_farm}]" if project.wiki_farm else ""
        multi = " (multi-wiki)" if project.is_multi_wiki else ""
        click.echo(f"   • {project.name}{farm_label}{multi}")
