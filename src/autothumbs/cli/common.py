"""Option parsing shared by several commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from autothumbs.io.imagemagick import ImageMagick
from autothumbs.io.pillow_tool import PillowTool
from autothumbs.io.tool import ResizeTool
from autothumbs.models.config import ThumbnailConfig, load_site_config

BACKENDS = ("imagemagick", "pillow")


def make_tool(backend: str) -> ResizeTool:
    if backend == "imagemagick":
        return ImageMagick()
    if backend == "pillow":
        return PillowTool()
    typer.echo(f"Error: unknown backend {backend!r} (choose from {', '.join(BACKENDS)})", err=True)
    raise typer.Exit(1)


def require_dir(path: str, label: str) -> Path:
    dir_path = Path(path)
    if not dir_path.is_dir():
        typer.echo(f"Error: {label} {path} is not a valid directory", err=True)
        raise typer.Exit(1)
    return dir_path


def resolve_config(site_source: Path, config_path: Optional[str]) -> ThumbnailConfig:
    """Config from --config, else <site_source>/_config.yml when present."""
    if config_path is None:
        default = site_source / "_config.yml"
        config_path = str(default) if default.is_file() else None
    elif not Path(config_path).is_file():
        typer.echo(f"Error: config file {config_path} not found", err=True)
        raise typer.Exit(1)
    return load_site_config(config_path, site_source)
