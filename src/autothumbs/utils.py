"""Shared utilities."""

from __future__ import annotations

import re

_THUMB_NAME_RE = re.compile(r"_thumb-[0-9a-f]{6}-\d*x\d*(\.[^.]*)?$")


def fmt_bytes(b: int | float) -> str:
    """Format byte count to human-readable string."""
    if b > 1_000_000_000:
        return f"{b / 1_000_000_000:.2f} GB"
    if b > 1_000_000:
        return f"{b / 1_000_000:.2f} MB"
    return f"{b / 1_000:.2f} KB"


def is_thumbnail_filename(name: str) -> bool:
    """True for names following the `{base}_thumb-{digest}-{w}x{h}{ext}` scheme."""
    return _THUMB_NAME_RE.search(name) is not None
