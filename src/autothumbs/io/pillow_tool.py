"""In-process Pillow backend for environments without ImageMagick."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from PIL import Image

logger = logging.getLogger(__name__)

_GEOMETRY_RE = re.compile(r"^(?P<width>\d*)x(?P<height>\d*)(?P<shrink>>?)$")
_UNBOUNDED = 1 << 30


def parse_geometry(geometry: str) -> tuple[int | None, int | None, bool]:
    """Split a `WxH>` geometry into (width, height, shrink_only)."""
    match = _GEOMETRY_RE.match(geometry.strip())
    if not match:
        raise ValueError(f"Invalid geometry: {geometry!r}")
    width = int(match.group("width")) if match.group("width") else None
    height = int(match.group("height")) if match.group("height") else None
    return width, height, bool(match.group("shrink"))


def fit_within(
    size: tuple[int, int],
    width: int | None,
    height: int | None,
    shrink_only: bool = True,
) -> tuple[int, int]:
    """Target size that fits the box while preserving aspect ratio."""
    src_w, src_h = size
    scales = []
    if width is not None:
        scales.append(width / src_w)
    if height is not None:
        scales.append(height / src_h)
    if not scales:
        return size
    scale = min(scales)
    if shrink_only and scale >= 1.0:
        return size
    return max(1, round(src_w * scale)), max(1, round(src_h * scale))


class PillowTool:
    """Resize backend built on Pillow. Always available once Pillow imports."""

    name = "pillow"

    def available(self) -> bool:
        return True

    def resize(
        self,
        source: str | Path,
        dest: str | Path,
        geometry: str,
        quality: int | None = None,
    ) -> bool:
        try:
            width, height, shrink_only = parse_geometry(geometry)
        except ValueError as exc:
            logger.debug("%s", exc)
            return False

        try:
            with Image.open(source) as img:
                img.seek(0)
                fmt = img.format
                frame = img.copy()
                target = fit_within(frame.size, width, height, shrink_only)
                if target != frame.size:
                    frame = frame.resize(target, Image.Resampling.LANCZOS)

                save_kwargs: dict[str, object] = {}
                if quality is not None:
                    save_kwargs["quality"] = quality
                if fmt == "JPEG" and frame.mode not in ("RGB", "L", "CMYK"):
                    frame = frame.convert("RGB")
                frame.save(dest, format=fmt, **save_kwargs)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            logger.debug("Pillow failed to resize %s: %s", source, exc)
            return False
        return True

    def probe_dimensions(self, source: str | Path) -> tuple[int, int] | None:
        try:
            with Image.open(source) as img:
                img.seek(0)
                return img.size
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            logger.debug("Pillow failed to read %s: %s", source, exc)
            return None
