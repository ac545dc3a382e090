"""Per-run table of images needing thumbnails and their required sizes."""

from __future__ import annotations

from autothumbs.models.requirement import Axis, DimensionRequirement


class Registry:
    """Collects size requirements per image URL during a scan pass.

    Registering a URL twice keeps the largest value seen on each axis. An
    unset axis never overrides a set one.
    """

    def __init__(self) -> None:
        self._entries: dict[str, DimensionRequirement] = {}

    def register(self, url: str, width: Axis, height: Axis) -> None:
        requirement = DimensionRequirement(width=width, height=height)
        existing = self._entries.get(url)
        self._entries[url] = existing.merged(requirement) if existing else requirement

    def is_registered(self, url: str) -> bool:
        return url in self._entries

    def requirements_for(self, url: str) -> DimensionRequirement | None:
        # frozen value, callers cannot mutate the stored entry
        return self._entries.get(url)

    def entries(self) -> dict[str, DimensionRequirement]:
        return dict(self._entries)

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)
