"""Boundary between the thumbnail engine and an image-processing backend."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ResizeTool(Protocol):
    """Backend able to shrink images and report their size.

    Implementations fail soft: a missing binary or unreadable file yields
    False / None, never an exception.
    """

    name: str

    def available(self) -> bool: ...

    def resize(
        self,
        source: str | Path,
        dest: str | Path,
        geometry: str,
        quality: int | None = None,
    ) -> bool: ...

    def probe_dimensions(self, source: str | Path) -> tuple[int, int] | None: ...
