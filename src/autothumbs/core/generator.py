"""Cached thumbnail generation keyed on source content."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from autothumbs.core.digest import short_digest
from autothumbs.core.urls import to_filesystem_path
from autothumbs.io.tool import ResizeTool
from autothumbs.models.config import ThumbnailConfig
from autothumbs.models.requirement import Axis, render_axis

logger = logging.getLogger(__name__)

LOSSY_EXTENSIONS = (".jpg", ".jpeg")


def build_thumbnail_filename(
    basename: str,
    digest: str,
    width: Axis,
    height: Axis,
    ext: str,
) -> str:
    """`{basename}_thumb-{digest}-{w}x{h}{ext}`; an unset axis renders empty."""
    return f"{basename}_thumb-{digest}-{render_axis(width)}x{render_axis(height)}{ext}"


def build_geometry(width: Axis, height: Axis) -> str:
    """Resize geometry that only ever shrinks, e.g. `400x300>` or `x300>`."""
    return f"{render_axis(width)}x{render_axis(height)}>"


def quality_for(ext: str, quality: int) -> int | None:
    """Quality setting for lossy formats; None for lossless ones."""
    return quality if ext.lower() in LOSSY_EXTENSIONS else None


@dataclass(frozen=True, slots=True)
class ThumbnailJob:
    url: str
    source_path: str
    cached_path: str
    width: Axis
    height: Axis

    @property
    def filename(self) -> str:
        return os.path.basename(self.cached_path)


class ThumbnailGenerator:
    def __init__(self, config: ThumbnailConfig, site_source: str | Path, tool: ResizeTool) -> None:
        self.config = config
        self.site_source = site_source
        self.tool = tool

    def is_available(self) -> bool:
        return self.tool.available()

    def plan(self, url: str, width: Axis, height: Axis) -> ThumbnailJob | None:
        """Resolve the source and compute the cache path. None if the source is missing."""
        source_path = to_filesystem_path(url, self.site_source)
        if not source_path or not os.path.isfile(source_path):
            return None

        # Existence was just checked; a failure here is a real error
        digest = short_digest(source_path)
        basename, ext = os.path.splitext(os.path.basename(source_path))
        thumb_filename = build_thumbnail_filename(basename, digest, width, height, ext)
        return ThumbnailJob(
            url=url,
            source_path=source_path,
            cached_path=os.path.join(self.config.cache_dir, thumb_filename),
            width=width,
            height=height,
        )

    def render(self, job: ThumbnailJob) -> str | None:
        """Produce the cached file for a job, or reuse it. None on failure.

        The tool writes to a temp file in the cache directory, renamed onto the
        cache entry only once it has passed the size check.
        """
        if os.path.exists(job.cached_path):
            logger.debug("Cache hit for %s: %s", job.url, job.filename)
            return job.cached_path

        os.makedirs(self.config.cache_dir, exist_ok=True)
        stem, ext = os.path.splitext(job.filename)
        # Keep the extension last so the tool picks the output format from it
        fd, tmp = tempfile.mkstemp(dir=self.config.cache_dir, prefix=f".{stem}.", suffix=f".tmp{ext}")
        os.close(fd)
        try:
            ok = self.tool.resize(
                job.source_path,
                tmp,
                build_geometry(job.width, job.height),
                quality_for(ext, self.config.quality),
            )
            if not ok:
                return None
            if not os.path.isfile(tmp) or os.path.getsize(tmp) == 0:
                logger.debug("%s reported success but wrote no file for %s", self.tool.name, job.url)
                return None

            source_size = os.path.getsize(job.source_path)
            thumb_size = os.path.getsize(tmp)
            if thumb_size > source_size:
                logger.warning(
                    "Thumbnail larger than original (%d > %d), discarding %s",
                    thumb_size,
                    source_size,
                    job.filename,
                )
                return None

            os.replace(tmp, job.cached_path)
        finally:
            if os.path.exists(tmp):
                os.unlink(tmp)

        return job.cached_path

    def generate(self, url: str, width: Axis, height: Axis) -> str | None:
        """Cached thumbnail path for url at the given box, generating it if needed."""
        job = self.plan(url, width, height)
        if job is None:
            return None
        return self.render(job)
