"""Tests for the requirement registry."""

from __future__ import annotations

from autothumbs.core.registry import Registry
from autothumbs.models.requirement import DimensionRequirement


class TestRegistry:
    def test_register_new(self) -> None:
        registry = Registry()
        registry.register("/a.jpg", 300, 200)
        assert registry.is_registered("/a.jpg")
        assert "/a.jpg" in registry
        assert registry.requirements_for("/a.jpg") == DimensionRequirement(300, 200)

    def test_unknown_url(self) -> None:
        registry = Registry()
        assert not registry.is_registered("/missing.jpg")
        assert registry.requirements_for("/missing.jpg") is None

    def test_merge_takes_larger_width(self) -> None:
        registry = Registry()
        registry.register("/u.jpg", 300, 200)
        registry.register("/u.jpg", 400, 200)
        assert registry.requirements_for("/u.jpg") == DimensionRequirement(400, 200)

    def test_merge_takes_larger_height(self) -> None:
        registry = Registry()
        registry.register("/u.jpg", 300, 200)
        registry.register("/u.jpg", 300, 300)
        assert registry.requirements_for("/u.jpg") == DimensionRequirement(300, 300)

    def test_smaller_request_does_not_shrink(self) -> None:
        registry = Registry()
        registry.register("/u.jpg", 500, 400)
        registry.register("/u.jpg", 100, 100)
        assert registry.requirements_for("/u.jpg") == DimensionRequirement(500, 400)

    def test_unset_axis_preserved(self) -> None:
        registry = Registry()
        registry.register("/u.jpg", None, 400)
        req = registry.requirements_for("/u.jpg")
        assert req is not None
        assert req.width is None
        assert req.height == 400

    def test_unset_never_overrides(self) -> None:
        registry = Registry()
        registry.register("/u.jpg", 300, None)
        registry.register("/u.jpg", None, 250)
        assert registry.requirements_for("/u.jpg") == DimensionRequirement(300, 250)

    def test_entries_is_a_copy(self) -> None:
        registry = Registry()
        registry.register("/a.jpg", 10, 10)
        entries = registry.entries()
        entries["/b.jpg"] = DimensionRequirement(1, 1)
        assert not registry.is_registered("/b.jpg")
        assert len(registry) == 1

    def test_both_unset_tolerated(self) -> None:
        registry = Registry()
        registry.register("/a.jpg", None, None)
        req = registry.requirements_for("/a.jpg")
        assert req is not None and req.is_empty
