"""autothumbs build and scan commands."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from autothumbs.cli.common import make_tool, require_dir, resolve_config

console = Console()


def build(
    site_source: str = typer.Argument(..., help="Site source directory holding the original images"),
    dest: str = typer.Argument(..., help="Built site directory to rewrite and publish into"),
    config_path: Optional[str] = typer.Option(
        None, "-c", "--config", help="YAML site config (default: SITE_SOURCE/_config.yml)"
    ),
    backend: str = typer.Option("imagemagick", "--backend", help="imagemagick or pillow"),
    workers: int = typer.Option(1, "--workers", help="Parallel thumbnail renders"),
    url_map_out: Optional[str] = typer.Option(
        None, "--url-map", help="Write the original -> thumbnail URL map as JSON"
    ),
) -> None:
    """Generate thumbnails, rewrite article images and publish the thumbnails."""
    from autothumbs.io.url_map_io import write_url_map
    from autothumbs.pipeline.runner import process_site_dir

    source_dir = require_dir(site_source, "site source")
    dest_dir = require_dir(dest, "destination")
    config = resolve_config(source_dir, config_path)
    tool = make_tool(backend)

    result = process_site_dir(source_dir, dest_dir, config, tool, workers=workers)

    if result.skipped:
        console.print(f"[yellow]Thumbnails skipped: {result.skipped}[/yellow]")
        return

    console.print("[bold green]Thumbnails complete![/bold green]")
    console.print(f"  Images registered: [bold]{result.registered:,}[/bold]")
    console.print(f"  Thumbnails: [bold]{len(result.url_map):,}[/bold]")
    console.print(f"  Pages rewritten: [bold]{result.pages_rewritten:,}[/bold]")
    console.print(f"  Published: [bold]{result.published:,}[/bold]")
    if result.failed:
        console.print(f"  Failed: [red]{len(result.failed):,}[/red]")

    if url_map_out:
        write_url_map(url_map_out, result.url_map)
        console.print(f"[green]Saved URL map to {url_map_out}[/green]")


def scan(
    site_source: str = typer.Argument(..., help="Site source directory holding the original images"),
    dest: str = typer.Argument(..., help="Built site directory to scan"),
    config_path: Optional[str] = typer.Option(
        None, "-c", "--config", help="YAML site config (default: SITE_SOURCE/_config.yml)"
    ),
    backend: str = typer.Option("imagemagick", "--backend", help="imagemagick or pillow"),
) -> None:
    """List the images that would get thumbnails, without generating anything."""
    from autothumbs.pipeline.runner import discover_pages, scan_pages

    source_dir = require_dir(site_source, "site source")
    dest_dir = require_dir(dest, "destination")
    config = resolve_config(source_dir, config_path)
    tool = make_tool(backend)

    if not tool.available():
        console.print(f"[red]{tool.name} not found.[/red]")
        raise typer.Exit(1)

    registry = scan_pages(discover_pages(dest_dir), config, tool, source_dir)
    if not len(registry):
        console.print("[yellow]No images need thumbnails.[/yellow]")
        return

    table = Table(title="Thumbnail requirements", border_style="blue")
    table.add_column("Image", style="bold")
    table.add_column("Width", justify="right")
    table.add_column("Height", justify="right")
    for url, req in sorted(registry.entries().items()):
        table.add_row(
            url,
            "-" if req.width is None else str(req.width),
            "-" if req.height is None else str(req.height),
        )
    console.print(table)
