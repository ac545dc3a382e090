"""Run configuration with validated, normalized fields."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

DEFAULT_QUALITY = 85
CONFIG_KEY = "auto_thumbnails"
LEGACY_CONFIG_KEY = "img_optimizer"
CACHE_DIRNAME = ".autothumbs-cache"

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}
_LEADING_INT_RE = re.compile(r"^\s*([-+]?\d+)")


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    # "800px" reads as 800
    match = _LEADING_INT_RE.match(str(value))
    return int(match.group(1)) if match else None


def parse_dimension(value: Any) -> int | None:
    """Positive integer, anything else is treated as unset."""
    val = _parse_int(value)
    return val if val is not None and val > 0 else None


def parse_quality(value: Any) -> int:
    """Quality in 0..100, otherwise the default."""
    val = _parse_int(value)
    return val if val is not None and 0 <= val <= 100 else DEFAULT_QUALITY


def parse_enabled(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return True


@dataclass(frozen=True, slots=True)
class ThumbnailConfig:
    enabled: bool = True
    max_width: int | None = None
    max_height: int | None = None
    quality: int = DEFAULT_QUALITY
    cache_dir: Path = field(default_factory=lambda: Path(CACHE_DIRNAME))

    @property
    def has_max_dimensions(self) -> bool:
        return self.max_width is not None or self.max_height is not None

    @classmethod
    def from_mapping(
        cls,
        options: Mapping[str, Any] | None,
        site_source: str | Path,
        cache_dir: str | Path | None = None,
    ) -> ThumbnailConfig:
        """Build a config from the host's loosely typed option mapping.

        Invalid values never raise: dimensions fall back to unset and quality
        to the default.
        """
        options = options or {}
        return cls(
            enabled=parse_enabled(options.get("enabled", True)),
            max_width=parse_dimension(options.get("max_width")),
            max_height=parse_dimension(options.get("max_height")),
            quality=parse_quality(options.get("quality", DEFAULT_QUALITY)),
            cache_dir=Path(cache_dir) if cache_dir else Path(site_source) / CACHE_DIRNAME,
        )


def load_site_config(
    path: str | Path | None,
    site_source: str | Path,
    cache_dir: str | Path | None = None,
) -> ThumbnailConfig:
    """Load a ThumbnailConfig from a YAML site config file."""
    import yaml  # type: ignore[import-untyped]

    if path is None or not Path(path).is_file():
        return ThumbnailConfig.from_mapping({}, site_source, cache_dir)

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        return ThumbnailConfig.from_mapping({}, site_source, cache_dir)

    section = data.get(CONFIG_KEY, data.get(LEGACY_CONFIG_KEY))
    if not isinstance(section, dict):
        section = {}
    return ThumbnailConfig.from_mapping(section, site_source, cache_dir)
