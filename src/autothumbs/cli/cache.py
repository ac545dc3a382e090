"""autothumbs cache and publish commands."""

from __future__ import annotations

import os
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from autothumbs.cli.common import require_dir, resolve_config
from autothumbs.utils import fmt_bytes, is_thumbnail_filename

console = Console()


def cache(
    site_source: str = typer.Argument(..., help="Site source directory"),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="YAML site config"),
    clear: bool = typer.Option(False, "--clear", help="Delete every cached thumbnail"),
) -> None:
    """List (or clear) cached thumbnails. The directory listing is the whole index."""
    source_dir = require_dir(site_source, "site source")
    config = resolve_config(source_dir, config_path)
    cache_dir = config.cache_dir

    if not cache_dir.is_dir():
        console.print(f"[yellow]No cache at {cache_dir}[/yellow]")
        return

    entries = sorted(
        p for p in cache_dir.iterdir() if p.is_file() and is_thumbnail_filename(p.name)
    )
    if clear:
        for p in entries:
            p.unlink()
        console.print(f"[green]Removed {len(entries):,} cached thumbnails[/green]")
        return

    table = Table(title=f"Cache: {cache_dir}", border_style="blue")
    table.add_column("Thumbnail", style="bold")
    table.add_column("Size", justify="right")
    total = 0
    for p in entries:
        size = p.stat().st_size
        total += size
        table.add_row(p.name, fmt_bytes(size))
    console.print(table)
    console.print(f"  {len(entries):,} thumbnails, {fmt_bytes(total)}")


def publish(
    url_map_path: str = typer.Argument(..., help="URL map JSON written by build --url-map"),
    site_source: str = typer.Argument(..., help="Site source directory (locates the cache)"),
    dest: str = typer.Argument(..., help="Built site directory to copy thumbnails into"),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="YAML site config"),
) -> None:
    """Copy cached thumbnails named in a URL map into the built site."""
    from autothumbs.io.publish import publish_thumbnails
    from autothumbs.io.url_map_io import read_url_map

    if not os.path.isfile(url_map_path):
        typer.echo(f"Error: {url_map_path} not found", err=True)
        raise typer.Exit(1)
    source_dir = require_dir(site_source, "site source")
    dest_dir = require_dir(dest, "destination")
    config = resolve_config(source_dir, config_path)

    url_map = read_url_map(url_map_path)
    copied = publish_thumbnails(url_map, config.cache_dir, dest_dir)
    console.print(f"[green]Published {copied:,} of {len(set(url_map.values())):,} thumbnails[/green]")
