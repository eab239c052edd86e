"""Public extraction entry points.

Single page::

    from pageshape import extract

    record = extract(html, url="https://shop.example.com/product/42")
    print(record.template, record.confidence)
    print(record.fields["price"])
    print(record.content_markdown)

Many pages at once::

    from pageshape import extract_batch

    records = extract_batch([(html_a, url_a), (html_b, url_b)], max_workers=4)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from pageshape.extractors.context import DocumentContext
from pageshape.extractors.fallback import run_chain
from pageshape.items import ExtractedRecord
from pageshape.settings import DEFAULT_CONFIG, ExtractionConfig
from pageshape.templates import TemplateRegistry, default_registry

logger = logging.getLogger(__name__)


def extract(
    html: str,
    url: str = "",
    *,
    template: str | None = None,
    registry: TemplateRegistry | None = None,
    config: ExtractionConfig | None = None,
) -> ExtractedRecord:
    """Extract a structured record from *html*.

    Args:
        html:     Raw HTML.  Malformed markup never raises.
        url:      Source URL, used for detection and to resolve relative links.
        template: Name of a registered template to use instead of detection.
                  Its detection score is still reported as ``confidence``.
                  An unknown name logs a warning and falls back to detection.
        registry: Templates to consider (default: the ten built-in shapes).
        config:   Weights, thresholds and word minimums.

    Returns:
        An immutable :class:`~pageshape.items.ExtractedRecord`.  A record with
        ``template == "generic"`` and ``confidence == 0`` means nothing on the
        page was recognised.

    Raises:
        TypeError: If *html* is not a ``str``.
    """
    ctx = DocumentContext(html, url)
    return run_chain(
        ctx,
        registry if registry is not None else default_registry(),
        config or DEFAULT_CONFIG,
        template,
    )


def extract_batch(
    pages: Iterable[tuple[str, str]],
    *,
    template: str | None = None,
    registry: TemplateRegistry | None = None,
    config: ExtractionConfig | None = None,
    max_workers: int | None = None,
) -> list[ExtractedRecord]:
    """Extract many ``(html, url)`` pages concurrently.

    Results come back in input order regardless of completion order.  Each
    page is extracted independently; nothing is shared between calls except
    the immutable *registry* and *config*.

    Raises:
        TypeError: If any page's HTML is not a ``str``.
        ValueError: If *max_workers* is less than 1.
    """
    items = list(pages)
    if not items:
        return []
    config = config or DEFAULT_CONFIG
    workers = max_workers if max_workers is not None else config.max_workers
    if workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {workers}")
    registry = registry if registry is not None else default_registry()

    results: list[ExtractedRecord | None] = [None] * len(items)
    with ThreadPoolExecutor(max_workers=min(workers, len(items))) as executor:
        futures = {
            executor.submit(
                extract, html, url, template=template, registry=registry, config=config,
            ): idx
            for idx, (html, url) in enumerate(items)
        }
        for future in as_completed(futures):
            results[futures[future]] = future.result()

    logger.info("Extracted %d page(s) with %d worker(s)", len(items), min(workers, len(items)))
    return [r for r in results if r is not None]
