"""Read/write the original-URL to thumbnail-URL map as JSON."""

from __future__ import annotations

from pathlib import Path

import orjson


def write_url_map(path: str | Path, url_map: dict[str, str]) -> None:
    data = orjson.dumps(url_map, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS)
    with open(path, "wb") as f:
        f.write(data)


def read_url_map(path: str | Path) -> dict[str, str]:
    """Load a URL map. Non-string entries are dropped."""
    data = orjson.loads(Path(path).read_bytes())
    if not isinstance(data, dict):
        return {}
    return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}
