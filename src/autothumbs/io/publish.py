"""Copy generated thumbnails from the cache into the site output tree."""

from __future__ import annotations

import logging
import os
import posixpath
import shutil
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


def publish_thumbnails(
    url_map: Mapping[str, str],
    cache_dir: str | Path,
    dest_root: str | Path,
) -> int:
    """Copy each mapped thumbnail to dest_root, mirroring its URL path.

    Returns the number of files copied.
    """
    copied = 0
    for thumb_url in set(url_map.values()):
        cached_path = os.path.join(cache_dir, posixpath.basename(thumb_url))
        if not os.path.isfile(cached_path):
            logger.warning("Cached thumbnail missing, not published: %s", cached_path)
            continue

        dest_path = os.path.join(dest_root, *thumb_url.lstrip("/").split("/"))
        os.makedirs(os.path.dirname(dest_path), exist_ok=True)
        shutil.copyfile(cached_path, dest_path)
        copied += 1
    return copied
