"""Tests for configuration parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from autothumbs.models.config import (
    DEFAULT_QUALITY,
    ThumbnailConfig,
    load_site_config,
    parse_dimension,
    parse_quality,
)


class TestFromMapping:
    def test_full_valid_configuration(self) -> None:
        config = ThumbnailConfig.from_mapping(
            {"enabled": True, "max_width": 1200, "max_height": 800, "quality": 90}, "/site"
        )
        assert config.enabled
        assert config.max_width == 1200
        assert config.max_height == 800
        assert config.quality == 90

    def test_defaults(self) -> None:
        config = ThumbnailConfig.from_mapping({}, "/site")
        assert config.enabled
        assert config.max_width is None
        assert config.max_height is None
        assert config.quality == DEFAULT_QUALITY
        assert not config.has_max_dimensions

    def test_none_mapping(self) -> None:
        config = ThumbnailConfig.from_mapping(None, "/site")
        assert config.quality == 85

    def test_partial(self) -> None:
        config = ThumbnailConfig.from_mapping({"max_width": 800}, "/site")
        assert config.max_width == 800
        assert config.max_height is None
        assert config.has_max_dimensions

    @pytest.mark.parametrize("quality", [150, -10, "high", None])
    def test_invalid_quality_falls_back(self, quality: object) -> None:
        config = ThumbnailConfig.from_mapping({"quality": quality}, "/site")
        assert config.quality == 85

    def test_quality_bounds_are_inclusive(self) -> None:
        assert parse_quality(0) == 0
        assert parse_quality(100) == 100

    def test_non_positive_dimensions_unset(self) -> None:
        config = ThumbnailConfig.from_mapping({"max_width": -100, "max_height": 0}, "/site")
        assert config.max_width is None
        assert config.max_height is None

    def test_string_dimensions(self) -> None:
        assert parse_dimension("800") == 800
        assert parse_dimension("800px") == 800
        assert parse_dimension("wide") is None
        assert parse_dimension(True) is None
        assert parse_dimension(640.7) == 640

    def test_disabled(self) -> None:
        assert not ThumbnailConfig.from_mapping({"enabled": False}, "/site").enabled
        assert not ThumbnailConfig.from_mapping({"enabled": "no"}, "/site").enabled
        assert ThumbnailConfig.from_mapping({"enabled": "yes"}, "/site").enabled

    def test_cache_dir_under_site_source(self) -> None:
        config = ThumbnailConfig.from_mapping({}, "/test/site")
        assert config.cache_dir == Path("/test/site/.autothumbs-cache")

    def test_explicit_cache_dir(self, tmp_path: Path) -> None:
        config = ThumbnailConfig.from_mapping({}, "/test/site", cache_dir=tmp_path)
        assert config.cache_dir == tmp_path

    def test_frozen(self) -> None:
        config = ThumbnailConfig.from_mapping({}, "/site")
        with pytest.raises(AttributeError):
            config.quality = 10  # type: ignore[misc]


class TestLoadSiteConfig:
    def test_reads_section(self, tmp_path: Path) -> None:
        path = tmp_path / "_config.yml"
        path.write_text("title: Blog\nauto_thumbnails:\n  max_width: 640\n  quality: 70\n")
        config = load_site_config(path, tmp_path)
        assert config.max_width == 640
        assert config.quality == 70

    def test_legacy_section(self, tmp_path: Path) -> None:
        path = tmp_path / "_config.yml"
        path.write_text("img_optimizer:\n  max_height: 480\n")
        assert load_site_config(path, tmp_path).max_height == 480

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        config = load_site_config(tmp_path / "nope.yml", tmp_path)
        assert config == ThumbnailConfig.from_mapping({}, tmp_path)

    def test_non_mapping_content(self, tmp_path: Path) -> None:
        path = tmp_path / "_config.yml"
        path.write_text("- just\n- a list\n")
        assert load_site_config(path, tmp_path).quality == 85

    def test_non_mapping_section(self, tmp_path: Path) -> None:
        path = tmp_path / "_config.yml"
        path.write_text("auto_thumbnails: true\n")
        assert load_site_config(path, tmp_path).enabled
