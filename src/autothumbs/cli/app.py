"""Root Typer app with global options."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="autothumbs",
    help="Generate cached thumbnails for images in a built static site.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        from autothumbs import __version__

        typer.echo(f"autothumbs {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("autothumbs")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=_version_callback, is_eager=True, help="Show version."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-image decisions."),
) -> None:
    """autothumbs: content-addressed thumbnails for static sites."""
    configure_logging(verbose)


# Import and register commands
from autothumbs.cli.build import build, scan  # noqa: E402
from autothumbs.cli.cache import cache, publish  # noqa: E402

app.command()(build)
app.command()(scan)
app.command()(cache)
app.command()(publish)
