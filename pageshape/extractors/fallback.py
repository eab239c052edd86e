"""Fallback chain: template → readability → generic heuristic.

Stages run in strict order and the first one that yields a record wins.
An exception inside a stage is logged and treated as "no result", so the
chain always terminates with a record.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pageshape.extractors.context import DocumentContext
from pageshape.extractors.detection import detect_best_template
from pageshape.extractors.generic import UNTITLED, generic_extract, title_only
from pageshape.extractors.main_content import extract_readable
from pageshape.extractors.markdown import (
    format_record,
    html_to_markdown,
    html_to_text,
    record_to_text,
)
from pageshape.extractors.metadata import extract_metadata
from pageshape.extractors.schema import extract_with_schema
from pageshape.extractors.validation import validate_record
from pageshape.items import ExtractedRecord
from pageshape.settings import ExtractionConfig
from pageshape.templates import Template, TemplateRegistry

logger = logging.getLogger(__name__)

# Fields tried in order for a template record's title
_TITLE_FIELDS: tuple[str, ...] = ("title", "display_name", "username")


class Stage(str, Enum):
    TEMPLATE = "template"
    READABILITY = "readability"
    GENERIC = "generic"


@dataclass
class _ChainState:
    ctx: DocumentContext
    registry: TemplateRegistry
    config: ExtractionConfig
    template_name: str | None
    extracted_at: str
    scores: dict[str, float] = field(default_factory=dict)


def _record_title(fields: dict[str, Any], ctx: DocumentContext) -> str:
    for name in _TITLE_FIELDS:
        value = fields.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ctx.title() or UNTITLED


def _resolve_template(state: _ChainState) -> tuple[Template | None, float]:
    explicit = state.registry.find(state.template_name)
    if state.template_name and explicit is None:
        logger.warning(
            "Template %r not found, falling back to auto-detection", state.template_name,
        )
    if explicit is not None:
        confidence = explicit.detect(state.ctx, state.config.weights)
        state.scores[explicit.name] = confidence
        logger.info("Using requested template %s for %s", explicit.name, state.ctx.url)
        return explicit, confidence

    detection = detect_best_template(state.ctx, state.registry, state.config)
    state.scores.update(detection.scores)
    return detection.template, detection.confidence


def _template_stage(state: _ChainState) -> ExtractedRecord | None:
    template, confidence = _resolve_template(state)
    if template is None:
        return None

    ctx = state.ctx
    raw = extract_with_schema(ctx, template.schema)
    checked = validate_record(raw, template.validation)
    fields = dict(checked.cleaned)
    if checked.errors:
        logger.info("Validation failed for %s on %s: %s", template.name, ctx.url, checked.errors)

    method = "template"
    content_text = record_to_text(fields)
    if template.article_like:
        readable = extract_readable(ctx, state.config)
        if readable is not None:
            fields["content"] = html_to_markdown(readable.html)
            content_text = html_to_text(readable.html)
            method = readable.method

    title = _record_title(fields, ctx)
    return ExtractedRecord(
        url=ctx.url,
        title=title,
        template=template.name,
        confidence=confidence,
        stage=Stage.TEMPLATE.value,
        method=method,
        scores=state.scores,
        extracted_at=state.extracted_at,
        fields=fields,
        content_text=content_text,
        content_markdown=format_record(template.name, fields, title),
        is_valid=checked.valid,
        errors=checked.errors,
    )


def _readability_stage(state: _ChainState) -> ExtractedRecord | None:
    ctx = state.ctx
    readable = extract_readable(ctx, state.config)
    if readable is None:
        return None

    meta = extract_metadata(ctx)
    title = readable.title or meta["title"] or ctx.title() or UNTITLED
    fields = {key: value for key, value in meta.items() if key != "title"}
    return ExtractedRecord(
        url=ctx.url,
        title=title,
        template=Stage.READABILITY.value,
        confidence=0.0,
        stage=Stage.READABILITY.value,
        method=readable.method,
        scores=state.scores,
        extracted_at=state.extracted_at,
        fields=fields,
        content_text=html_to_text(readable.html),
        content_markdown=html_to_markdown(readable.html) + "\n",
    )


def _generic_stage(state: _ChainState) -> ExtractedRecord:
    ctx = state.ctx
    result = generic_extract(ctx)
    return _generic_record(state, result.title, result.markdown, result.text, "dom_heuristic")


def _generic_record(
    state: _ChainState, title: str, markdown: str, text: str, method: str,
) -> ExtractedRecord:
    description = None
    try:
        description = state.ctx.meta_content(name="description")
    except Exception as exc:
        logger.debug("Description lookup failed: %s", exc)
    return ExtractedRecord(
        url=state.ctx.url,
        title=title,
        template=Stage.GENERIC.value,
        confidence=0.0,
        stage=Stage.GENERIC.value,
        method=method,
        scores=state.scores,
        extracted_at=state.extracted_at,
        fields={"description": description},
        content_text=text,
        content_markdown=markdown,
    )


_STAGES: tuple[tuple[Stage, Callable[[_ChainState], ExtractedRecord | None]], ...] = (
    (Stage.TEMPLATE, _template_stage),
    (Stage.READABILITY, _readability_stage),
    (Stage.GENERIC, _generic_stage),
)


def run_chain(
    ctx: DocumentContext,
    registry: TemplateRegistry,
    config: ExtractionConfig,
    template_name: str | None = None,
) -> ExtractedRecord:
    """Run every stage in order until one produces a record."""
    state = _ChainState(
        ctx=ctx,
        registry=registry,
        config=config,
        template_name=template_name,
        extracted_at=datetime.now(timezone.utc).isoformat(),
    )
    for stage, run in _STAGES:
        try:
            record = run(state)
        except Exception as exc:
            logger.warning("Stage %s failed for %s: %s", stage.value, ctx.url, exc)
            continue
        if record is not None:
            logger.info("Stage %s produced record for %s", stage.value, ctx.url)
            return record
        logger.info("Stage %s found nothing for %s", stage.value, ctx.url)

    result = title_only(ctx)
    return _generic_record(state, result.title, result.markdown, result.text, "title_only")
