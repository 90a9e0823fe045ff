"""sitemapgen CLI - generate and inspect XML sitemaps.

Commands:
- init: Create a sitemapgen.config file
- generate: Build the sitemap for a site URL and store it
- show: Print a stored sitemap
- list: List stored sitemaps
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

load_dotenv()

console = Console()


def _parse_patterns(patterns_str: str | None) -> tuple[str, ...]:
    if not patterns_str:
        return ()
    return tuple(p.strip() for p in patterns_str.split(",") if p.strip())


def _configure_logging(verbose: bool) -> None:
    from sitemapgen.config import get_config_or_default

    try:
        level = "DEBUG" if verbose else get_config_or_default().LOG_LEVEL
    except (ValueError, FileNotFoundError):
        level = "WARNING"
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _open_repository():
    from sitemapgen.config import get_config_or_default
    from sitemapgen.db import SqlSitemapRepository

    return SqlSitemapRepository.from_path(get_config_or_default().get_absolute_db_path())


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="sitemapgen")
def main(verbose: bool):
    """Generate deduplicated, size-capped XML sitemaps from a content tree."""
    _configure_logging(verbose)


@main.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing sitemapgen.config")
def init_cmd(force: bool):
    """Create a sitemapgen.config file in the current directory."""
    from sitemapgen.config import config_file_exists, create_config, get_config_file_path

    if config_file_exists() and not force:
        console.print(f"[yellow]Configuration already exists:[/yellow] {get_config_file_path()}")
        console.print("[dim]Use --force to overwrite[/dim]")
        return

    create_config()
    console.print(f"[green]✓[/green] Created {get_config_file_path()}")


@main.command("generate")
@click.argument("site_url")
@click.option("--root-id", type=int, help="Root content node (default: the site's start node)")
@click.option("--exclude", "exclude_patterns", help="Paths to exclude (comma-separated)")
@click.option("--include", "include_patterns", help="Paths to include (comma-separated)")
@click.option(
    "--dialect",
    type=click.Choice(["standard", "mobile"], case_sensitive=False),
    help="Sitemap dialect (default: SITEMAP_FORMAT from config)",
)
@click.option("--host", default="sitemap.xml", show_default=True, help="Sitemap file name")
@click.option("--sites", "sites_path", type=click.Path(path_type=Path), help="Sites YAML file")
@click.option(
    "--content", "content_path", type=click.Path(path_type=Path), help="Content tree YAML file"
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Write files here instead of the database",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def generate_cmd(
    site_url: str,
    root_id: int | None,
    exclude_patterns: str | None,
    include_patterns: str | None,
    dialect: str | None,
    host: str,
    sites_path: Path | None,
    content_path: Path | None,
    output_dir: Path | None,
    output_format: str,
):
    """
    Generate the sitemap for SITE_URL.

    \b
    Examples:
        sitemapgen generate https://example.com/
        sitemapgen generate https://example.com/ --exclude /search,/admin
        sitemapgen generate https://example.com/ --dialect mobile --output-dir ./public
    """
    from pydantic import ValidationError

    from sitemapgen.config import get_config_or_default
    from sitemapgen.core import HostLanguageCache, SitemapBuilder
    from sitemapgen.db import FileSitemapSink
    from sitemapgen.errors import ConfigurationMismatchError
    from sitemapgen.models import SitemapRequest
    from sitemapgen.sources import SlugUrlResolver, load_content, load_sites

    config = get_config_or_default()

    try:
        request = SitemapRequest(
            site_url=site_url,
            host=host,
            root_node_id=root_id,
            url_filter_rules=_parse_patterns(exclude_patterns),
            include_paths=_parse_patterns(include_patterns),
            format=(dialect or config.SITEMAP_FORMAT).lower(),
        )
        sites = load_sites(sites_path or config.get_absolute_sites_path())
        repository = load_content(content_path or config.get_absolute_content_path())
    except (ValidationError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    sink = FileSitemapSink(output_dir) if output_dir else _open_repository()
    builder = SitemapBuilder(
        site_source=sites,
        repository=repository,
        resolver=SlugUrlResolver(repository),
        sink=sink,
        host_cache=HostLanguageCache(ttl=config.HOST_CACHE_TTL_SECONDS),
    )
    try:
        builder.require_site(request)
        mismatch = None
    except ConfigurationMismatchError as e:
        mismatch = e
    result = builder.generate(request)

    if output_format == "json":
        click.echo(json.dumps(result.model_dump(exclude={"data"}), indent=2))
    elif result.success:
        if mismatch is not None:
            console.print(f"[yellow]Warning:[/yellow] {mismatch.message}; writing an empty sitemap")
        console.print(f"[green]✓[/green] Generated {result.entry_count} entries for {site_url}")
        if result.exceeded_cap:
            console.print("[yellow]Entry limit reached - sitemap was truncated[/yellow]")
        if result.skipped:
            console.print(f"[dim]{result.skipped} entries skipped (unresolvable URLs)[/dim]")
        if output_dir:
            console.print(f"[dim]Written to {sink.path_for(site_url, host)}[/dim]")
    else:
        console.print(f"[red]Error:[/red] Sitemap generation failed: {result.error}")

    if not result.success:
        sys.exit(1)


@main.command("show")
@click.argument("site_url")
@click.option("--host", default="sitemap.xml", show_default=True, help="Sitemap file name")
def show_cmd(site_url: str, host: str):
    """Print the stored sitemap XML for SITE_URL."""
    record = _open_repository().get(site_url, host)
    if record is None:
        console.print(f"[red]Error:[/red] No sitemap stored for {site_url} ({host})")
        sys.exit(1)
    click.echo(record.data.decode("utf-8"))


@main.command("list")
def list_cmd():
    """List stored sitemaps."""
    records = _open_repository().list_records()
    if not records:
        console.print("[dim]No sitemaps stored[/dim]")
        return

    table = Table(title="Stored sitemaps")
    table.add_column("Site URL", style="cyan")
    table.add_column("Host")
    table.add_column("Format")
    table.add_column("Entries", justify="right")
    table.add_column("Truncated")
    table.add_column("Generated")
    for record in records:
        table.add_row(
            record.site_url,
            record.host,
            record.sitemap_format,
            str(record.entry_count),
            "yes" if record.exceeds_maximum_entry_count else "no",
            record.generated_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
    console.print(table)


if __name__ == "__main__":
    main()
