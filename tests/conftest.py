"""Shared fixtures: programmatic site images and a recording fake backend."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import numpy as np
import pytest
from PIL import Image

from autothumbs.models.config import ThumbnailConfig


def write_image(path: Path, width: int, height: int, seed: int = 0) -> Path:
    """Write a noisy RGB image (noise keeps JPEGs from shrinking to nothing)."""
    rng = np.random.default_rng(seed)
    arr = rng.integers(40, 220, (height, width, 3), dtype=np.uint8)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(arr).save(path)
    return path


class FakeTool:
    """Records calls; writes a small (or configurably large) output file."""

    name = "fake"

    def __init__(
        self,
        dimensions: dict[str, tuple[int, int]] | None = None,
        is_available: bool = True,
        succeed: bool = True,
        output_bytes: int = 16,
    ) -> None:
        self.dimensions = dimensions or {}
        self.is_available = is_available
        self.succeed = succeed
        self.output_bytes = output_bytes
        self.resize_calls: list[tuple[str, str, str, int | None]] = []
        self.probe_calls: list[str] = []

    def available(self) -> bool:
        return self.is_available

    def resize(self, source, dest, geometry, quality=None) -> bool:
        self.resize_calls.append((str(source), str(dest), geometry, quality))
        if not self.succeed:
            return False
        Path(dest).write_bytes(b"\0" * self.output_bytes)
        return True

    def probe_dimensions(self, source) -> tuple[int, int] | None:
        self.probe_calls.append(str(source))
        return self.dimensions.get(os.path.basename(str(source)))


@pytest.fixture
def fake_tool() -> FakeTool:
    return FakeTool()


@pytest.fixture
def site_source(tmp_path: Path) -> Path:
    """Site source with a few images; content is irrelevant to FakeTool."""
    src = tmp_path / "site"
    src.mkdir()
    (src / "p.jpg").write_bytes(b"jpeg-bytes " * 100)
    (src / "photo.jpg").write_bytes(b"other jpeg " * 100)
    assets = src / "assets" / "img"
    assets.mkdir(parents=True)
    (assets / "photo.png").write_bytes(b"png-bytes " * 100)
    return src


@pytest.fixture
def dest_root(tmp_path: Path) -> Path:
    dest = tmp_path / "_site"
    dest.mkdir()
    return dest


@pytest.fixture
def make_config(site_source: Path) -> Callable[..., ThumbnailConfig]:
    def _make(**options: object) -> ThumbnailConfig:
        return ThumbnailConfig.from_mapping(options, site_source)

    return _make


@pytest.fixture
def real_site(tmp_path: Path) -> Path:
    """Site source with real images for Pillow/ImageMagick backends."""
    src = tmp_path / "real_site"
    write_image(src / "p.jpg", 400, 300, seed=1)
    write_image(src / "assets" / "wide.png", 320, 80, seed=2)

    frames = [
        Image.new("RGB", (120, 40), color)
        for color in ((255, 0, 0), (0, 255, 0), (0, 0, 255))
    ]
    frames[0].save(src / "banner.gif", save_all=True, append_images=frames[1:], duration=100)
    return src
