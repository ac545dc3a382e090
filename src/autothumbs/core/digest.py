"""Content digests used as cache keys."""

from __future__ import annotations

import hashlib
from pathlib import Path

DIGEST_LENGTH = 6
_CHUNK_SIZE = 1 << 16


def file_digest(path: str | Path) -> str:
    """Full MD5 hex digest of a file's bytes. Raises FileNotFoundError if missing."""
    md5 = hashlib.md5(usedforsecurity=False)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            md5.update(chunk)
    return md5.hexdigest()


def short_digest(path: str | Path) -> str:
    """First 6 hex characters of the file's MD5 digest."""
    return file_digest(path)[:DIGEST_LENGTH]
