"""Document context: one parsed tree per extraction call.

The tree is built once and shared read-only by the scorer, the schema
extractor and the fallback stages.  Stages that need to strip elements call
:meth:`DocumentContext.copy_tree` and mutate the copy.
"""

from __future__ import annotations

import copy
import logging
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Comment, Doctype, Tag

logger = logging.getLogger(__name__)

# Attributes whose values are URLs and get resolved against the base URL
_URL_ATTRIBUTES: frozenset[str] = frozenset(
    {"src", "href", "data-src", "poster", "action"},
)

# Elements whose text never counts as visible page text
_INVISIBLE_TAGS: frozenset[str] = frozenset(
    {"script", "style", "noscript", "template", "head", "title"},
)


def _safe_str(val: object) -> str | None:
    """Normalise a BeautifulSoup attribute value (str | list | None) to str."""
    if val is None:
        return None
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


def _parse(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "lxml")
    except Exception as exc:
        logger.debug("HTML parse failed, using empty document: %s", exc)
        return BeautifulSoup("", "lxml")


class DocumentContext:
    """Parsed HTML bound to its source URL.

    Args:
        html: Raw HTML text.  Malformed markup is tolerated; markup the parser
              cannot handle at all degrades to an empty document.
        url:  Source URL, used for URL-pattern detection and to resolve
              relative ``src``/``href`` values.

    Raises:
        TypeError: If *html* is not a ``str``.
    """

    __slots__ = ("_html", "_url", "_soup", "_select_cache", "_visible_text")

    def __init__(self, html: str, url: str = "") -> None:
        if not isinstance(html, str):
            raise TypeError(f"html must be str, got {type(html).__name__}")
        self._html = html
        self._url = (url or "").strip()
        self._soup = _parse(html)
        self._select_cache: dict[str, tuple[Tag, ...]] = {}
        self._visible_text: str | None = None

    @property
    def html(self) -> str:
        return self._html

    @property
    def url(self) -> str:
        return self._url

    @property
    def soup(self) -> BeautifulSoup:
        """The shared tree.  Treat as read-only; use :meth:`copy_tree` to edit."""
        return self._soup

    def copy_tree(self) -> BeautifulSoup:
        """Return an independent copy of the tree that callers may mutate."""
        try:
            return copy.copy(self._soup)
        except Exception as exc:
            logger.debug("Tree copy failed, re-parsing: %s", exc)
            return _parse(self._html)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def select(self, selector: str) -> list[Tag]:
        """Return every node matching *selector*; invalid selectors match nothing."""
        cached = self._select_cache.get(selector)
        if cached is None:
            try:
                cached = tuple(
                    el for el in self._soup.select(selector) if isinstance(el, Tag)
                )
            except Exception as exc:
                logger.debug("CSS selector %r failed: %s", selector, exc)
                cached = ()
            self._select_cache[selector] = cached
        return list(cached)

    def select_one(self, selector: str) -> Tag | None:
        matches = self.select(selector)
        return matches[0] if matches else None

    def exists(self, selector: str) -> bool:
        return bool(self.select(selector))

    def search(self, text: str) -> bool:
        """Case-insensitive substring test against the visible page text."""
        return bool(text) and text.lower() in self.visible_text()

    # ------------------------------------------------------------------
    # Node access
    # ------------------------------------------------------------------

    def node_text(self, node: Tag) -> str:
        """Whitespace-collapsed text of *node*.

        ``<meta>`` yields its content and ``<time>`` its ``datetime`` attribute
        when that is present.
        """
        if node.name == "meta":
            return (_safe_str(node.get("content")) or "").strip()
        if node.name == "time":
            stamp = (_safe_str(node.get("datetime")) or "").strip()
            if stamp:
                return stamp
        return " ".join(node.get_text(separator=" ").split())

    def node_attr(self, node: Tag, name: str) -> str | None:
        """Attribute *name* of *node*, URL attributes resolved against the base URL."""
        raw = _safe_str(node.get(name))
        if raw is None and node.name == "meta":
            raw = _safe_str(node.get("content"))
            name = "content"
        if raw is None:
            return None
        value = raw.strip()
        if not value:
            return None
        if self._url and (
            name in _URL_ATTRIBUTES
            or (name == "content" and value.startswith(("/", "./", "../")))
        ):
            value = urljoin(self._url, value)
        return value

    def visible_text(self) -> str:
        """Lower-cased text of the body, excluding script/style/template content."""
        if self._visible_text is None:
            root = self._soup.body or self._soup
            parts: list[str] = []
            for string in root.find_all(string=True):
                if isinstance(string, (Comment, Doctype)):
                    continue
                parent = string.parent
                if parent is not None and parent.name in _INVISIBLE_TAGS:
                    continue
                parts.append(str(string))
            self._visible_text = " ".join(" ".join(parts).split()).lower()
        return self._visible_text

    def title(self) -> str:
        """Document ``<title>``, else the first ``<h1>``, else an empty string."""
        title_tag = self._soup.find("title")
        if isinstance(title_tag, Tag):
            text = " ".join(title_tag.get_text().split())
            if text:
                return text
        h1 = self._soup.find("h1")
        if isinstance(h1, Tag):
            return " ".join(h1.get_text(separator=" ").split())
        return ""

    def meta_content(self, *, name: str | None = None, prop: str | None = None) -> str | None:
        """Content of the first ``<meta name=...>`` or ``<meta property=...>``."""
        attrs = {"name": name} if name else {"property": prop}
        tag = self._soup.find("meta", attrs=attrs)
        if isinstance(tag, Tag):
            content = (_safe_str(tag.get("content")) or "").strip()
            return content or None
        return None
