"""Declarative field extraction driven by per-template schemas.

A :class:`FieldSpec` lists CSS selectors in priority order.  The first
selector with at least one match wins; later selectors are never tried,
even when the winning node's value is later rejected by a filter or
transform.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from bs4 import Tag

from pageshape.extractors.context import DocumentContext
from pageshape.extractors.transforms import clean_text

logger = logging.getLogger(__name__)

Transform = Callable[[str], Any]


@dataclass(frozen=True)
class FieldFilter:
    """Accept-or-reject rule applied to raw field text before the transform.

    Exactly one of ``regex`` or ``contains`` must be set.
    """

    regex: re.Pattern[str] | None = None
    contains: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if (self.regex is None) == (not self.contains):
            raise ValueError("FieldFilter needs exactly one of regex or contains")

    def apply(self, text: str) -> str | None:
        if self.regex is not None:
            match = self.regex.search(text)
            if not match:
                return None
            return match.group(1) if match.re.groups else match.group(0)
        lower = text.lower()
        return text if any(term.lower() in lower for term in self.contains) else None


@dataclass(frozen=True)
class FieldSpec:
    """How to pull one field out of a document."""

    selectors: tuple[str, ...]
    attribute: str | None = None
    multiple: bool = False
    transform: Transform | None = None
    filter: FieldFilter | None = None

    def __post_init__(self) -> None:
        if not self.selectors:
            raise ValueError("FieldSpec needs at least one selector")


def field(
    *selectors: str,
    attribute: str | None = None,
    multiple: bool = False,
    transform: Transform | None = None,
    regex: str | None = None,
    contains: tuple[str, ...] = (),
) -> FieldSpec:
    """Shorthand for building a :class:`FieldSpec` in template modules."""
    flt = None
    if regex is not None or contains:
        flt = FieldFilter(
            regex=re.compile(regex, re.IGNORECASE) if regex is not None else None,
            contains=tuple(contains),
        )
    return FieldSpec(
        selectors=tuple(selectors),
        attribute=attribute,
        multiple=multiple,
        transform=transform,
        filter=flt,
    )


def _raw_value(ctx: DocumentContext, node: Tag, spec: FieldSpec) -> str:
    if spec.attribute:
        return clean_text(ctx.node_attr(node, spec.attribute))
    return clean_text(ctx.node_text(node))


def _finish(text: str, spec: FieldSpec) -> Any:
    if not text:
        return None
    if spec.filter is not None:
        filtered = spec.filter.apply(text)
        if filtered is None:
            return None
        text = filtered
    if spec.transform is None:
        return text
    try:
        return spec.transform(text)
    except Exception as exc:
        logger.debug("Transform failed on %r: %s", text, exc)
        return None


def extract_field(ctx: DocumentContext, spec: FieldSpec) -> Any:
    """Value of one field, or ``None`` when nothing usable matched."""
    for selector in spec.selectors:
        nodes = ctx.select(selector)
        if not nodes:
            continue
        if not spec.multiple:
            return _finish(_raw_value(ctx, nodes[0], spec), spec)
        values = [_finish(_raw_value(ctx, node, spec), spec) for node in nodes]
        values = [v for v in values if v is not None]
        return values or None
    return None


def extract_with_schema(
    ctx: DocumentContext,
    schema: Mapping[str, FieldSpec],
) -> dict[str, Any]:
    """Extract every field of *schema*; missing fields map to ``None``."""
    result: dict[str, Any] = {}
    for name, spec in schema.items():
        result[name] = extract_field(ctx, spec)
    hits = sum(1 for v in result.values() if v is not None)
    logger.debug("Extracted %d/%d fields from %s", hits, len(schema), ctx.url)
    return result
