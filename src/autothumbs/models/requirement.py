"""Image references and per-image dimension requirements."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Unset (None) or a pixel count. Only rendered to text at the filename and
# geometry boundaries, see render_axis.
Axis = Optional[int]


def render_axis(axis: Axis) -> str:
    return "" if axis is None else str(axis)


def max_axis(a: Axis, b: Axis) -> Axis:
    """Larger of two axes; an unset side never overrides a set one."""
    if a is None:
        return b
    if b is None:
        return a
    return max(a, b)


@dataclass(frozen=True, slots=True)
class ImageReference:
    url: str
    explicit_width: Axis = None
    explicit_height: Axis = None

    @property
    def is_sized(self) -> bool:
        return self.explicit_width is not None or self.explicit_height is not None


@dataclass(frozen=True, slots=True)
class DimensionRequirement:
    width: Axis = None
    height: Axis = None

    @property
    def is_empty(self) -> bool:
        return self.width is None and self.height is None

    def merged(self, other: DimensionRequirement) -> DimensionRequirement:
        return DimensionRequirement(
            width=max_axis(self.width, other.width),
            height=max_axis(self.height, other.height),
        )
