"""Mapping between image URLs as written in HTML and filesystem paths."""

from __future__ import annotations

import os
import posixpath

_EXTERNAL_PREFIXES = ("http://", "https://", "//")


def is_external(url: str) -> bool:
    """True for http(s) and protocol-relative URLs."""
    return url.startswith(_EXTERNAL_PREFIXES)


def resolve_path(url: str, base_dir: str) -> str | None:
    """Resolve a relative URL against base_dir, lexically.

    Rooted URLs come back unchanged and external URLs resolve to None. The
    filesystem is never consulted; "." and ".." segments are collapsed.
    """
    if is_external(url):
        return None
    if url.startswith("/"):
        return url

    cleaned = url[2:] if url.startswith("./") else url
    return posixpath.normpath(posixpath.join(base_dir, cleaned))


def to_filesystem_path(url: str, site_source: str | os.PathLike[str]) -> str | None:
    """Join a site-rooted URL onto the site source directory."""
    if is_external(url):
        return None
    cleaned = url[1:] if url.startswith("/") else url
    return os.path.join(os.fspath(site_source), cleaned)


def thumbnail_url(original_url: str, thumb_filename: str) -> str:
    """Published URL of a thumbnail, beside the original. Always forward slashes."""
    url_dir = posixpath.dirname(original_url)
    if url_dir in ("", "."):
        return f"/{thumb_filename}"
    if url_dir.endswith("/"):
        return f"{url_dir}{thumb_filename}"
    return f"{url_dir}/{thumb_filename}"
