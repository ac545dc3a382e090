"""Scan rendered HTML for article images and derive their size requirements."""

from __future__ import annotations

import logging
import math
import os
import re
from pathlib import Path

from autothumbs.core.registry import Registry
from autothumbs.core.urls import is_external, resolve_path, to_filesystem_path
from autothumbs.io.html import ArticleDocument, ImageHandle
from autothumbs.io.tool import ResizeTool
from autothumbs.models.config import ThumbnailConfig
from autothumbs.models.requirement import Axis, ImageReference

logger = logging.getLogger(__name__)

_NON_DIGIT_RE = re.compile(r"\D")


def parse_dimension(value: str | None) -> Axis:
    """Read a width/height attribute. "300px" -> 300, "" or "auto" -> None."""
    if not value:
        return None
    digits = _NON_DIGIT_RE.sub("", value)
    if not digits:
        return None
    return int(digits)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def complete_dimensions(
    width: Axis,
    height: Axis,
    actual: tuple[int, int],
) -> tuple[Axis, Axis]:
    """Fill in a missing axis from the image's real aspect ratio."""
    actual_width, actual_height = actual
    if actual_width <= 0 or actual_height <= 0:
        return width, height
    if width is not None and height is None:
        height = round_half_up(width * (actual_height / actual_width))
    elif height is not None and width is None:
        width = round_half_up(height * (actual_width / actual_height))
    return width, height


def matches_original(width: Axis, height: Axis, actual: tuple[int, int]) -> bool:
    return (width, height) == actual


def exceeds_max(actual: tuple[int, int], config: ThumbnailConfig) -> bool:
    actual_width, actual_height = actual
    if config.max_width is not None and actual_width > config.max_width:
        return True
    if config.max_height is not None and actual_height > config.max_height:
        return True
    return False


def read_reference(img: ImageHandle, base_dir: str | None = None) -> ImageReference | None:
    """Reference for an eligible image, or None for missing/external sources."""
    src = img.src
    if not src or is_external(src):
        return None
    if base_dir is not None:
        src = resolve_path(src, base_dir) or src
    return ImageReference(
        url=src,
        explicit_width=parse_dimension(img.width),
        explicit_height=parse_dimension(img.height),
    )


def probe_image(url: str, site_source: str | Path, tool: ResizeTool) -> tuple[int, int] | None:
    """Actual (width, height) of a site image, or None if it can't be read."""
    file_path = to_filesystem_path(url, site_source)
    if not file_path or not os.path.isfile(file_path):
        return None
    return tool.probe_dimensions(file_path)


def register_sized(
    ref: ImageReference,
    registry: Registry,
    tool: ResizeTool,
    site_source: str | Path | None,
) -> bool:
    width, height = ref.explicit_width, ref.explicit_height
    actual = probe_image(ref.url, site_source, tool) if site_source is not None else None

    if actual is not None:
        if width is None or height is None:
            width, height = complete_dimensions(width, height, actual)
            logger.debug("Calculated dimensions for %s: %sx%s", ref.url, width, height)
        if matches_original(width, height, actual):
            logger.debug("Skipping %s - dimensions match original", ref.url)
            return False

    logger.debug("Registering %s at %sx%s", ref.url, width, height)
    registry.register(ref.url, width, height)
    return True


def register_oversized(
    ref: ImageReference,
    registry: Registry,
    config: ThumbnailConfig,
    tool: ResizeTool,
    site_source: str | Path,
) -> bool:
    actual = probe_image(ref.url, site_source, tool)
    if actual is None:
        logger.debug("Could not read dimensions of %s", ref.url)
        return False
    if not exceeds_max(actual, config):
        return False

    # Both maxima go in together; the resize geometry keeps the aspect ratio
    logger.debug(
        "Registering oversized %s (%dx%d) at %sx%s",
        ref.url,
        actual[0],
        actual[1],
        config.max_width,
        config.max_height,
    )
    registry.register(ref.url, config.max_width, config.max_height)
    return True


def scan_html(
    html: str,
    registry: Registry,
    config: ThumbnailConfig,
    tool: ResizeTool,
    site_source: str | Path | None = None,
    base_dir: str | None = None,
) -> int:
    """Register every article image in html that needs a thumbnail.

    Explicitly sized images are registered at their (completed) size unless it
    equals the original. Unsized images are only considered when a maximum
    width or height is configured and a site source is known. Returns the
    number of registrations made.
    """
    registered = 0
    doc = ArticleDocument(html)
    for img in doc.images():
        ref = read_reference(img, base_dir)
        if ref is None:
            continue

        if ref.is_sized:
            if register_sized(ref, registry, tool, site_source):
                registered += 1
        elif site_source is not None and config.has_max_dimensions:
            if register_oversized(ref, registry, config, tool, site_source):
                registered += 1

    return registered
