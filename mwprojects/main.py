"""
mwprojects — CLI entrypoint.

Usage:
    python -m mwprojects.main --help
    python -m mwprojects.main resolve https://en.wikipedia.org/wiki/Main_Page
    python -m mwprojects.main decode de.minecraft fandom.com
    python -m mwprojects.main catalog check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from mwprojects import __version__
from mwprojects.core.errors import CatalogError, ResolutionError
from mwprojects.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="mwprojects")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--catalog",
    "-c",
    "catalog_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to a catalog file (default: $MWP_CATALOG or the bundled catalog).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    catalog_path: str | None,
) -> None:
    """mwprojects — resolve URLs against known MediaWiki projects and proxies."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["catalog_path"] = Path(catalog_path) if catalog_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("MWP_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("MWP_LOG_FILE"),
        log_file_level=os.environ.get("MWP_LOG_FILE_LEVEL"),
    )


def _resolver(ctx: click.Context):
    """Build (once per invocation) the resolver for the selected catalog."""
    from mwprojects.core.config.settings import ResolverSettings
    from mwprojects.core.services.resolver import CatalogResolver

    if "resolver" not in ctx.obj:
        try:
            settings = ResolverSettings.from_env(catalog_path=ctx.obj.get("catalog_path"))
            ctx.obj["resolver"] = CatalogResolver.from_settings(settings)
        except CatalogError as e:
            _fail(e)
    return ctx.obj["resolver"]


def _fail(e: Exception) -> None:
    """Report bad catalog data and exit 1."""
    click.secho(f"❌ {e}", fg="red", err=True)
    sys.exit(1)


def _not_found(what: str, value: str) -> None:
    click.secho(f"❌ No {what} matches {value}", fg="red", err=True)
    sys.exit(1)


# ── Wiki projects ───────────────────────────────────────────────


@cli.command()
@click.argument("text")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def resolve(ctx: click.Context, text: str, as_json: bool) -> None:
    """Resolve a URL or path to its wiki's article and script paths."""
    try:
        result = _resolver(ctx).resolve_wiki_project(text)
    except ResolutionError as e:
        _fail(e)
    if result is None:
        _not_found("wiki project", text)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    project = result.wiki_project
    farm = f" [{project.wiki_farm}]" if project.wiki_farm else ""
    click.secho(f"📚 {project.name}{farm}", fg="cyan", bold=True)
    click.echo(f"   Article path: {result.full_article_path}")
    click.echo(f"   Script path:  {result.full_script_path}")
    if project.extensions:
        click.echo(f"   Extensions:   {', '.join(project.extensions)}")
    if project.note and not ctx.obj.get("quiet"):
        click.echo(f"   Note: {project.note}")


@cli.command()
@click.argument("url")
@click.pass_context
def encode(ctx: click.Context, url: str) -> None:
    """Encode a wiki URL as the id string of its project."""
    id_string = _resolver(ctx).encode_id_string(url)
    if id_string is None:
        _not_found("multi-wiki project", url)
    click.echo(id_string)


@cli.command()
@click.argument("id_string")
@click.argument("project")
@click.pass_context
def decode(ctx: click.Context, id_string: str, project: str) -> None:
    """Decode ID_STRING of PROJECT (exact name) into its script path URL."""
    try:
        url = _resolver(ctx).decode_id_string(id_string, project)
    except ResolutionError as e:
        _fail(e)
    if url is None:
        _not_found(f"{project} wiki", id_string)
    click.echo(url.geturl())


# ── Frontend proxies ────────────────────────────────────────────


@cli.command()
@click.argument("text")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def proxy(ctx: click.Context, text: str, as_json: bool) -> None:
    """Resolve a frontend proxy URL to the proxied wiki's paths."""
    try:
        result = _resolver(ctx).resolve_frontend_proxy(text)
    except ResolutionError as e:
        _fail(e)
    if result is None:
        _not_found("frontend proxy", text)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho(f"🔀 {result.frontend_proxy.name}", fg="cyan", bold=True)
    click.echo(f"   Name path:    {result.full_name_path}")
    click.echo(f"   Article path: {result.full_article_path}")
    click.echo(f"   Script path:  {result.full_script_path}")


@cli.command("fix-link")
@click.argument("url")
@click.argument("href")
@click.argument("pagelink")
@click.pass_context
def fix_link(ctx: click.Context, url: str, href: str, pagelink: str) -> None:
    """Rewrite a relative HREF found on PAGELINK for the proxy serving URL."""
    fixer = _resolver(ctx).link_fixer(url)
    if fixer is None:
        # Nothing to restore for this host
        click.echo(href)
        return
    click.echo(fixer(href, pagelink))


# ── Sub-groups ──────────────────────────────────────────────────

from mwprojects.ui.cli.catalog import catalog  # noqa: E402

cli.add_command(catalog)


if __name__ == "__main__":
    cli()
