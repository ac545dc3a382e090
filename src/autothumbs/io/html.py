"""HTML boundary: find article images and rewrite their sources."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from bs4 import BeautifulSoup, Tag

from autothumbs.core.urls import resolve_path

# Images outside this scope (navigation, headers, footers) are never touched
ARTICLE_IMAGE_SELECTOR = "article img"


class ImageHandle:
    """One <img> element inside an article, readable and src-writable."""

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def _attr(self, name: str) -> str | None:
        value = self._tag.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    @property
    def src(self) -> str | None:
        return self._attr("src")

    @src.setter
    def src(self, value: str) -> None:
        self._tag["src"] = value

    @property
    def width(self) -> str | None:
        return self._attr("width")

    @property
    def height(self) -> str | None:
        return self._attr("height")


class ArticleDocument:
    """Parsed page. Mutations through handles show up in serialize()."""

    def __init__(self, html: str) -> None:
        self._soup = BeautifulSoup(html, "html.parser")

    def images(self) -> Iterator[ImageHandle]:
        for tag in self._soup.select(ARTICLE_IMAGE_SELECTOR):
            yield ImageHandle(tag)

    def serialize(self) -> str:
        return str(self._soup)


def rewrite_urls(
    html: str,
    url_map: Mapping[str, str],
    base_dir: str | None = None,
) -> str:
    """Point article images at their thumbnails.

    Returns the input unchanged when the map is empty or no image matched, so
    untouched pages keep their exact original markup.
    """
    if not url_map:
        return html

    doc = ArticleDocument(html)
    changed = False
    for img in doc.images():
        src = img.src
        if not src:
            continue
        key = src
        if base_dir is not None:
            key = resolve_path(src, base_dir) or src
        thumb_url = url_map.get(key)
        if thumb_url:
            img.src = thumb_url
            changed = True

    return doc.serialize() if changed else html
