"""Markdown rendering: HTML conversion and template-record layouts."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

from bs4 import BeautifulSoup
from markdownify import markdownify

logger = logging.getLogger(__name__)

_EXCESSIVE_BLANK_LINES_RE = re.compile(r"\n{3,}")
_TRAILING_WHITESPACE_RE = re.compile(r"[ \t]+$", re.MULTILINE)

DEFAULT_CURRENCY = "$"


def html_to_markdown(html: str) -> str:
    """Convert *html* to clean Markdown.

    Uses markdownify with ATX headings and ``-`` bullets, fenced code blocks
    tagged with the ``language-*`` class when present.  Falls back to plain
    text if conversion fails.
    """
    if not html or not html.strip():
        return ""

    try:
        md = markdownify(
            html,
            heading_style="ATX",
            bullets="-",
            code_language_callback=_detect_lang,
            strip=["script", "style", "noscript", "iframe"],
        )
    except Exception as exc:
        logger.debug("markdownify failed, using plain text: %s", exc)
        md = BeautifulSoup(html, "lxml").get_text(separator="\n")

    md = _TRAILING_WHITESPACE_RE.sub("", md)
    md = _EXCESSIVE_BLANK_LINES_RE.sub("\n\n", md)
    return md.strip()


def html_to_text(html: str) -> str:
    """Whitespace-collapsed text of an HTML fragment."""
    if not html or not html.strip():
        return ""
    try:
        soup = BeautifulSoup(html, "lxml")
    except Exception as exc:
        logger.debug("Text conversion failed: %s", exc)
        return ""
    return " ".join(soup.get_text(separator=" ").split())


def _detect_lang(el: object) -> str:
    """Language hint from an element's ``language-*`` class, for markdownify."""
    getter = getattr(el, "get", None)
    classes = (getter("class") if getter else None) or []
    for cls in classes:
        if isinstance(cls, str) and cls.startswith("language-"):
            return cls[len("language-"):]
    return ""


# ---------------------------------------------------------------------------
# Record formatting
# ---------------------------------------------------------------------------

def _label(name: str) -> str:
    return name.replace("_", " ").capitalize()


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _money(value: Any, currency: str) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{currency}{value:,.2f}"
    return f"{currency}{value}"


def _format_product(fields: Mapping[str, Any]) -> list[str]:
    currency = fields.get("currency") or DEFAULT_CURRENCY
    lines: list[str] = []
    if fields.get("price") is not None:
        lines.append(f"**Price:** {_money(fields['price'], currency)}")
    if fields.get("original_price") is not None:
        lines.append(f"**Was:** {_money(fields['original_price'], currency)}")
    if fields.get("availability"):
        lines.append(f"**Availability:** {fields['availability']}")
    if fields.get("rating") is not None:
        rating = f"**Rating:** {_scalar(fields['rating'])}/5"
        if fields.get("review_count") is not None:
            rating += f" ({fields['review_count']} reviews)"
        lines.append(rating)
    if lines:
        lines.append("")
    if fields.get("description"):
        lines += ["## Description", "", str(fields["description"]), ""]
    if fields.get("features"):
        lines += ["## Features", ""]
        lines += [f"- {item}" for item in fields["features"]]
        lines.append("")
    return lines


def _format_article(fields: Mapping[str, Any]) -> list[str]:
    lines: list[str] = []
    if fields.get("author"):
        lines.append(f"*By {fields['author']}*")
    if fields.get("publish_date"):
        lines.append(f"*Published: {fields['publish_date']}*")
    if fields.get("read_time") is not None:
        lines.append(f"*{fields['read_time']} min read*")
    if lines:
        lines.append("")
    if fields.get("summary"):
        lines += [f"> {fields['summary']}", ""]
    if fields.get("content"):
        lines += [str(fields["content"]), ""]
    if fields.get("tags"):
        lines.append(f"**Tags:** {', '.join(str(t) for t in fields['tags'])}")
    return lines


def _format_recipe(fields: Mapping[str, Any]) -> list[str]:
    lines: list[str] = []
    for key, label in (
        ("prep_time", "Prep Time"),
        ("cook_time", "Cook Time"),
        ("total_time", "Total Time"),
    ):
        if fields.get(key) is not None:
            lines.append(f"**{label}:** {fields[key]} min")
    if fields.get("servings") is not None:
        lines.append(f"**Servings:** {fields['servings']}")
    if lines:
        lines.append("")
    if fields.get("ingredients"):
        lines += ["## Ingredients", ""]
        lines += [f"- {item}" for item in fields["ingredients"]]
        lines.append("")
    if fields.get("instructions"):
        lines += ["## Instructions", ""]
        lines += [f"{i}. {step}" for i, step in enumerate(fields["instructions"], start=1)]
        lines.append("")
    return lines


def _format_generic(fields: Mapping[str, Any]) -> list[str]:
    lines: list[str] = []
    for name, value in fields.items():
        if value is None or name == "title":
            continue
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            lines += [f"## {_label(name)}", ""]
            lines += [f"- {_scalar(item)}" for item in value]
            lines.append("")
        elif isinstance(value, dict):
            lines += [
                f"## {_label(name)}",
                "",
                "```json",
                json.dumps(value, indent=2, ensure_ascii=False, default=str),
                "```",
                "",
            ]
        else:
            lines.append(f"**{_label(name)}:** {_scalar(value)}")
    return lines


_LAYOUTS: dict[str, Callable[[Mapping[str, Any]], list[str]]] = {
    "ecommerce_product": _format_product,
    "article": _format_article,
    "recipe": _format_recipe,
}


def format_record(template: str, fields: Mapping[str, Any], title: str = "") -> str:
    """Render a template record as Markdown.

    Products, articles and recipes get dedicated layouts; every other
    template uses a field-by-field rendering.  Missing values are skipped.
    """
    lines: list[str] = []
    if title:
        lines += [f"# {title}", ""]
    layout = _LAYOUTS.get(template, _format_generic)
    lines += layout(fields)
    md = "\n".join(lines)
    md = _EXCESSIVE_BLANK_LINES_RE.sub("\n\n", md)
    return md.strip() + "\n"


def record_to_text(fields: Mapping[str, Any]) -> str:
    """Plain-text rendering of a record: one ``Label: value`` line per field."""
    lines: list[str] = []
    for name, value in fields.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            if value:
                lines.append(f"{_label(name)}: {'; '.join(_scalar(v) for v in value)}")
        elif isinstance(value, dict):
            lines.append(f"{_label(name)}: {json.dumps(value, ensure_ascii=False, default=str)}")
        else:
            lines.append(f"{_label(name)}: {_scalar(value)}")
    return "\n".join(lines)
