"""Scan -> generate -> rewrite -> publish orchestration with Rich progress."""

from __future__ import annotations

import logging
import os
import posixpath
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from autothumbs.core.generator import ThumbnailGenerator, ThumbnailJob
from autothumbs.core.registry import Registry
from autothumbs.core.scanner import scan_html
from autothumbs.core.urls import thumbnail_url
from autothumbs.io.html import rewrite_urls
from autothumbs.io.publish import publish_thumbnails
from autothumbs.io.tool import ResizeTool
from autothumbs.models.config import ThumbnailConfig

logger = logging.getLogger(__name__)
console = Console(stderr=True)

HTML_EXTENSIONS = (".html", ".htm", ".md", ".markdown")
# Undecodable bytes survive the read and write back unchanged
PAGE_ENCODING_ERRORS = "surrogateescape"


@dataclass(slots=True)
class Page:
    path: str
    url: str
    html: str


@dataclass(slots=True)
class RunResult:
    registered: int = 0
    url_map: dict[str, str] = field(default_factory=dict)
    failed: list[str] = field(default_factory=list)
    pages_rewritten: int = 0
    published: int = 0
    skipped: str | None = None


def is_html_page(page: Page) -> bool:
    """Only HTML-producing pages are scanned; stylesheets and scripts are not."""
    if page.path.lower().endswith(HTML_EXTENSIONS):
        return True
    return page.url.endswith((".html", ".htm", "/"))


def page_base_dir(url: str) -> str:
    """URL directory that relative image sources on this page resolve against."""
    if url.endswith("/"):
        return url.rstrip("/") or "/"
    return posixpath.dirname(url) or "/"


def discover_pages(site_dir: str | Path) -> list[Page]:
    """Load every .html/.htm file under a built site, sorted by path."""
    root = Path(site_dir)
    pages: list[Page] = []
    for dirpath, _dirnames, filenames in os.walk(root):
        for fn in filenames:
            if not fn.lower().endswith((".html", ".htm")):
                continue
            path = os.path.join(dirpath, fn)
            rel = Path(path).relative_to(root).as_posix()
            with open(path, encoding="utf-8", errors=PAGE_ENCODING_ERRORS) as f:
                pages.append(Page(path=path, url=f"/{rel}", html=f.read()))
    pages.sort(key=lambda p: p.path)
    return pages


def scan_pages(
    pages: list[Page],
    config: ThumbnailConfig,
    tool: ResizeTool,
    site_source: str | Path,
) -> Registry:
    registry = Registry()
    for page in pages:
        if not is_html_page(page):
            continue
        scan_html(page.html, registry, config, tool, site_source, base_dir=page_base_dir(page.url))
    return registry


def _make_progress() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]Generating thumbnails"),
        BarColumn(bar_width=40),
        MofNCompleteColumn(),
        TextColumn("•"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def generate_all(
    generator: ThumbnailGenerator,
    registry: Registry,
    workers: int = 1,
) -> tuple[dict[str, str], list[str]]:
    """Render every registry entry. Returns (url_map, failed_urls).

    Jobs are keyed by cache path before dispatch, so each distinct thumbnail is
    rendered at most once even when several URLs share it.
    """
    failed: list[str] = []
    jobs_by_url: dict[str, ThumbnailJob] = {}
    unique: dict[str, ThumbnailJob] = {}

    for url, req in registry.entries().items():
        job = generator.plan(url, req.width, req.height)
        if job is None:
            logger.warning("Failed to generate thumbnail for %s: source not found", url)
            failed.append(url)
            continue
        jobs_by_url[url] = job
        unique.setdefault(job.cached_path, job)

    rendered: dict[str, str | None] = {}
    with _make_progress() as progress:
        task = progress.add_task("Generating", total=len(unique))
        if workers <= 1 or len(unique) <= 1:
            for cached_path, job in unique.items():
                rendered[cached_path] = generator.render(job)
                progress.update(task, advance=1)
        else:
            with ThreadPoolExecutor(max_workers=min(workers, len(unique))) as executor:
                futures: dict[Future[str | None], str] = {
                    executor.submit(generator.render, job): cached_path
                    for cached_path, job in unique.items()
                }
                for future in as_completed(futures):
                    rendered[futures[future]] = future.result()
                    progress.update(task, advance=1)

    url_map: dict[str, str] = {}
    for url, job in jobs_by_url.items():
        if rendered.get(job.cached_path) is None:
            logger.warning("Failed to generate thumbnail for %s", url)
            failed.append(url)
            continue
        url_map[url] = thumbnail_url(url, job.filename)
    return url_map, failed


def run_site(
    pages: list[Page],
    site_source: str | Path,
    dest_root: str | Path,
    config: ThumbnailConfig,
    tool: ResizeTool,
    workers: int = 1,
) -> RunResult:
    """Run the whole pass over in-memory pages, rewriting their html in place.

    A disabled config or an unavailable tool leaves every page untouched.
    """
    result = RunResult()
    if not config.enabled:
        result.skipped = "disabled"
        return result

    generator = ThumbnailGenerator(config, site_source, tool)
    if not generator.is_available():
        logger.warning("%s not found - skipping thumbnail generation", tool.name)
        result.skipped = "tool unavailable"
        return result

    registry = scan_pages(pages, config, tool, site_source)
    result.registered = len(registry)
    logger.info("Found %d images to optimize", result.registered)

    result.url_map, result.failed = generate_all(generator, registry, workers)
    logger.info("Generated %d thumbnails", len(result.url_map))

    if result.url_map:
        for page in pages:
            if not is_html_page(page):
                continue
            new_html = rewrite_urls(page.html, result.url_map, base_dir=page_base_dir(page.url))
            if new_html != page.html:
                page.html = new_html
                result.pages_rewritten += 1

    result.published = publish_thumbnails(result.url_map, config.cache_dir, dest_root)
    if result.published:
        logger.info("Copied %d thumbnails to %s", result.published, dest_root)
    return result


def process_site_dir(
    site_source: str | Path,
    dest_root: str | Path,
    config: ThumbnailConfig,
    tool: ResizeTool,
    workers: int = 1,
) -> RunResult:
    """Run over a built site directory, writing rewritten pages back to disk."""
    pages = discover_pages(dest_root)
    originals = {page.path: page.html for page in pages}
    result = run_site(pages, site_source, dest_root, config, tool, workers)
    for page in pages:
        if page.html != originals[page.path]:
            with open(page.path, "w", encoding="utf-8", errors=PAGE_ENCODING_ERRORS) as f:
                f.write(page.html)
    return result
