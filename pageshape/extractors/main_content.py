"""Readability-style main-content recovery.

Runs readability-lxml (Mozilla Readability algorithm) and trafilatura
independently and keeps the richer of the two:

  1. Each extractor must reach its own minimum word count to count at all.
  2. When both succeed, trafilatura wins only if it yields at least
     ``trafilatura_preference_ratio`` times as many words.
  3. When neither succeeds the attempt returns None and the caller moves on.
"""

from __future__ import annotations

import contextlib
import logging
import re
from typing import NamedTuple

import trafilatura
from bs4 import BeautifulSoup, Tag
from readability import Document

from pageshape.extractors.context import DocumentContext
from pageshape.settings import DEFAULT_CONFIG, ExtractionConfig

logger = logging.getLogger(__name__)

_TEMPLATE_BLOCK_RE = re.compile(r"<template\b[^>]*>.*?</template>", re.DOTALL | re.IGNORECASE)

# Known cookie-consent widgets, removed before either extractor runs
_COOKIE_CONSENT_SELECTORS: tuple[str, ...] = (
    "#onetrust-consent-sdk",
    "#onetrust-banner-sdk",
    "#CybotCookiebotDialog",
    "#cookie-law-info-bar",
    "#cmplz-cookiebanner-container",
    "#BorlabsCookieBox",
    ".cky-consent-container",
    ".cookie-banner",
    ".cookie-notice",
    ".cookie-consent",
    ".gdpr-banner",
    "#cookie-notice",
    "#cookie-banner",
)

_READABILITY_NO_TITLE = "[no-title]"


class ReadabilityResult(NamedTuple):
    html: str
    title: str
    method: str
    word_count: int


def _count_words(html: str) -> int:
    try:
        soup = BeautifulSoup(html, "lxml")
    except Exception as exc:
        logger.debug("Word count failed: %s", exc)
        return 0
    return len(soup.get_text(separator=" ").split())


def _preprocess_html(ctx: DocumentContext) -> str:
    """Serialise a copy of the tree without consent overlays or ``<template>`` blocks."""
    soup = ctx.copy_tree()
    for selector in _COOKIE_CONSENT_SELECTORS:
        with contextlib.suppress(Exception):
            for el in soup.select(selector):
                if isinstance(el, Tag):
                    el.decompose()
    for el in soup.find_all("template"):
        el.decompose()
    return _TEMPLATE_BLOCK_RE.sub("", str(soup))


def _try_readability(html: str, url: str, min_words: int) -> tuple[str, str, int] | None:
    try:
        doc = Document(html, url=url or None)
        content = doc.summary(html_partial=True)
        title = doc.short_title() or ""
    except Exception as exc:
        logger.debug("readability failed for %s: %s", url, exc)
        return None
    words = _count_words(content)
    if words < min_words:
        logger.debug("readability too short (%d words) for %s", words, url)
        return None
    if title == _READABILITY_NO_TITLE:
        title = ""
    return content, title, words


def _try_trafilatura(html: str, url: str, min_words: int) -> tuple[str, int] | None:
    try:
        content = trafilatura.extract(
            html,
            include_links=True,
            include_images=True,
            include_tables=True,
            output_format="html",
            url=url or None,
            favor_recall=True,
        )
    except Exception as exc:
        logger.debug("trafilatura failed for %s: %s", url, exc)
        return None
    if not content:
        return None
    words = _count_words(content)
    if words < min_words:
        logger.debug("trafilatura too short (%d words) for %s", words, url)
        return None
    return content, words


def extract_readable(
    ctx: DocumentContext,
    config: ExtractionConfig | None = None,
) -> ReadabilityResult | None:
    """Best-of-two main-content extraction, or None when neither succeeds."""
    config = config or DEFAULT_CONFIG
    if not ctx.html.strip():
        return None

    html = _preprocess_html(ctx)
    readable = _try_readability(html, ctx.url, config.readability_min_words)
    traf = _try_trafilatura(html, ctx.url, config.trafilatura_min_words)

    r_words = readable[2] if readable else 0
    t_words = traf[1] if traf else 0
    logger.debug("readability=%d words  trafilatura=%d words  url=%s", r_words, t_words, ctx.url)

    title = readable[1] if readable else ""

    if readable and traf:
        if t_words >= r_words * config.trafilatura_preference_ratio:
            logger.debug("trafilatura wins (%d vs %d words) for %s", t_words, r_words, ctx.url)
            return ReadabilityResult(traf[0], title, "trafilatura", t_words)
        return ReadabilityResult(readable[0], title, "readability", r_words)
    if readable:
        return ReadabilityResult(readable[0], title, "readability", r_words)
    if traf:
        return ReadabilityResult(traf[0], title, "trafilatura", t_words)
    return None
