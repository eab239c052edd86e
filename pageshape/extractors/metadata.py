"""Page-level metadata used by the fallback stages.

Priority chain (highest → lowest):
    JSON-LD → Open Graph / article:* → Twitter Card → <meta> tags → <title> / <h1>
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from pageshape.extractors.context import DocumentContext
from pageshape.extractors.transforms import clean_text, parse_date

logger = logging.getLogger(__name__)

# JSON-LD @type values preferred when a page carries several nodes
_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        "article",
        "blogposting",
        "newsarticle",
        "techarticle",
        "scholarlyarticle",
        "liveblogposting",
        "reportage",
        "product",
        "recipe",
        "event",
        "jobposting",
        "videoobject",
        "discussionforumposting",
        "qapage",
    },
)
_PAGE_TYPES: frozenset[str] = frozenset({"webpage", "website"})

METADATA_KEYS: tuple[str, ...] = (
    "title",
    "author",
    "published_at",
    "updated_at",
    "site_name",
    "language",
    "summary",
    "tags",
    "canonical_url",
    "image",
)


def _first(*values: Any) -> Any:
    for v in values:
        if v:
            return v
    return None


def _types_of(node: dict) -> set[str]:
    raw = node.get("@type", "")
    if isinstance(raw, list):
        return {str(t).lower() for t in raw}
    return {str(raw).lower()}


def _jsonld_nodes(soup: BeautifulSoup) -> list[dict]:
    nodes: list[dict] = []
    for script in soup.find_all("script", type="application/ld+json"):
        try:
            raw = json.loads(script.string or "")
        except (json.JSONDecodeError, TypeError):
            logger.debug("Skipping malformed JSON-LD block")
            continue
        if isinstance(raw, list):
            candidates = raw
        elif isinstance(raw, dict):
            candidates = raw.get("@graph", [raw])
        else:
            continue
        nodes.extend(n for n in candidates if isinstance(n, dict))
    return nodes


def _pick_jsonld(nodes: list[dict]) -> dict:
    fallback: dict = {}
    for node in nodes:
        types = _types_of(node)
        if types & _CONTENT_TYPES:
            return node
        if not fallback and types & _PAGE_TYPES:
            fallback = node
    return fallback


def _name_of(value: Any) -> str | None:
    if isinstance(value, dict):
        name = value.get("name")
        return str(name) if name else None
    if isinstance(value, list) and value:
        return _name_of(value[0])
    if isinstance(value, str):
        return value or None
    return None


def _image_of(value: Any) -> str | None:
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        return _image_of(value.get("url"))
    if isinstance(value, list) and value:
        return _image_of(value[0])
    return None


def _social_meta(soup: BeautifulSoup) -> dict[str, str]:
    found: dict[str, str] = {}
    for tag in soup.find_all("meta"):
        if not isinstance(tag, Tag):
            continue
        key = str(tag.get("property") or tag.get("name") or "").lower()
        content = str(tag.get("content") or "").strip()
        if content and key.startswith(("og:", "article:", "twitter:")):
            found.setdefault(key, content)
    return found


def _keywords(node: dict, soup: BeautifulSoup) -> list[str]:
    raw = node.get("keywords")
    if isinstance(raw, str):
        tags = [t.strip() for t in raw.split(",")]
    elif isinstance(raw, list):
        tags = [str(t).strip() for t in raw]
    else:
        tags = []
    for tag in soup.find_all("meta", property="article:tag"):
        if isinstance(tag, Tag):
            tags.append(str(tag.get("content") or "").strip())

    seen: set[str] = set()
    unique: list[str] = []
    for t in tags:
        if t and t.lower() not in seen:
            seen.add(t.lower())
            unique.append(t)
    return unique


def _canonical(soup: BeautifulSoup, page_url: str) -> str | None:
    for link in soup.find_all("link"):
        if not isinstance(link, Tag):
            continue
        rel = link.get("rel") or []
        if "canonical" in rel:
            href = str(link.get("href") or "").strip()
            if href:
                return urljoin(page_url, href) if page_url else href
    return None


def _language(soup: BeautifulSoup, social: dict[str, str], node: dict) -> str | None:
    html_tag = soup.find("html")
    if isinstance(html_tag, Tag):
        lang = str(html_tag.get("lang") or "").strip()
        if lang:
            return lang[:10]
    locale = social.get("og:locale")
    if locale:
        return locale.replace("_", "-").split("-")[0][:5]
    in_language = node.get("inLanguage")
    return str(in_language)[:10] if in_language else None


def extract_metadata(ctx: DocumentContext) -> dict[str, Any]:
    """Collect title, byline, dates and friends from structured page metadata.

    Returns a dict with every key in :data:`METADATA_KEYS`; ``tags`` is a
    list, everything else a string or None.
    """
    soup = ctx.soup
    node = _pick_jsonld(_jsonld_nodes(soup))
    social = _social_meta(soup)

    h1 = soup.find("h1")
    title = _first(
        node.get("headline"),
        node.get("name") if isinstance(node.get("name"), str) else None,
        social.get("og:title"),
        social.get("twitter:title"),
        ctx.title(),
        h1.get_text(separator=" ") if isinstance(h1, Tag) else None,
    )

    author = _first(
        _name_of(node.get("author")),
        social.get("article:author"),
        ctx.meta_content(name="author"),
        social.get("twitter:creator"),
    )

    time_tag = soup.find("time")
    time_value = str(time_tag.get("datetime") or "") if isinstance(time_tag, Tag) else ""
    published_at = parse_date(
        _first(
            node.get("datePublished"),
            social.get("article:published_time"),
            ctx.meta_content(name="pubdate"),
            time_value,
        ),
    )
    updated_at = parse_date(
        _first(
            node.get("dateModified"),
            social.get("article:modified_time"),
            social.get("og:updated_time"),
        ),
    )

    site_name = _first(
        social.get("og:site_name"),
        _name_of(node.get("publisher")),
        urlparse(ctx.url).netloc.removeprefix("www.") if ctx.url else None,
    )

    summary = _first(
        node.get("description") if isinstance(node.get("description"), str) else None,
        social.get("og:description"),
        social.get("twitter:description"),
        ctx.meta_content(name="description"),
    )

    image = _first(_image_of(node.get("image")), social.get("og:image"))
    if image and ctx.url:
        image = urljoin(ctx.url, image)

    return {
        "title": clean_text(str(title)) if title else "",
        "author": clean_text(author) or None,
        "published_at": published_at,
        "updated_at": updated_at,
        "site_name": site_name,
        "language": _language(soup, social, node),
        "summary": clean_text(summary) or None,
        "tags": _keywords(node, soup),
        "canonical_url": _canonical(soup, ctx.url),
        "image": image,
    }
