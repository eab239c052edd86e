"""Last-resort DOM heuristic: strip chrome, pick a main region, walk headings.

Works on a private copy of the tree and always produces a result, even for
an empty document (a title heading with an empty body).
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from pageshape.extractors.context import DocumentContext
from pageshape.extractors.markdown import html_to_markdown

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"

_CHROME_SELECTOR = (
    "nav, header, footer, aside, .nav, .header, .footer, .sidebar, "
    "#nav, #header, #footer, #sidebar"
)
_MAIN_SELECTORS: tuple[str, ...] = (
    "main",
    '[role="main"]',
    "#main",
    ".main",
    "article",
    ".content",
    "#content",
)
_HEADINGS: frozenset[str] = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
_INVISIBLE: tuple[str, ...] = ("script", "style", "noscript", "template")


class GenericResult(NamedTuple):
    title: str
    markdown: str
    text: str


def _strip_chrome(soup: BeautifulSoup) -> None:
    for el in soup.find_all(_INVISIBLE):
        el.decompose()
    try:
        chrome = soup.select(_CHROME_SELECTOR)
    except Exception as exc:
        logger.debug("Chrome selector failed: %s", exc)
        return
    for el in chrome:
        if isinstance(el, Tag) and not el.decomposed:
            el.decompose()


def _main_region(soup: BeautifulSoup) -> Tag | None:
    for selector in _MAIN_SELECTORS:
        found = soup.select_one(selector)
        if isinstance(found, Tag):
            return found
    body = soup.body
    return body if isinstance(body, Tag) else None


def _walk_sections(node: Tag, parts: list[str]) -> None:
    """Append Markdown for the children of *node* in document order.

    Headings become Markdown headings; containers that hold a heading are
    descended into so every heading and block is emitted exactly once.
    """
    for child in node.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            loose = " ".join(str(child).split())
            if loose:
                parts.append(loose)
            continue
        if not isinstance(child, Tag):
            continue
        if child.name in _HEADINGS:
            text = " ".join(child.get_text(separator=" ").split())
            if text:
                parts.append(f"{'#' * int(child.name[1])} {text}")
            continue
        if child.find(list(_HEADINGS)) is not None:
            _walk_sections(child, parts)
            continue
        body = html_to_markdown(str(child))
        if body:
            parts.append(body)


def generic_extract(ctx: DocumentContext) -> GenericResult:
    """Structure whatever content the page has into Markdown."""
    title = ctx.title() or UNTITLED
    soup = ctx.copy_tree()
    _strip_chrome(soup)
    region = _main_region(soup)

    parts = [f"# {title}"]
    text = ""
    if region is not None:
        if region.find(list(_HEADINGS)) is not None:
            _walk_sections(region, parts)
        else:
            body = html_to_markdown(region.decode_contents())
            if body:
                parts.append(body)
        text = " ".join(region.get_text(separator=" ").split())

    logger.debug("generic heuristic produced %d section(s) for %s", len(parts) - 1, ctx.url)
    return GenericResult(title=title, markdown="\n\n".join(parts) + "\n", text=text)


def title_only(ctx: DocumentContext) -> GenericResult:
    """Minimal result used when even the heuristic fails."""
    try:
        title = ctx.title() or UNTITLED
    except Exception as exc:
        logger.debug("Title lookup failed for %s: %s", ctx.url, exc)
        title = UNTITLED
    return GenericResult(title=title, markdown=f"# {title}\n", text="")
