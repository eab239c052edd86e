"""Template detection: score how well a page matches each registered shape.

Each template declares four signal groups.  A group contributes
``min(1, hits / len(group)) * weight``; an empty group contributes 0.  The
weighted sum is the template's confidence in [0, 1].

Ranking (registry order is the tie-break):
  1. Score templates in registry order; a score above ``high_confidence``
     is selected immediately.
  2. Otherwise the maximum score wins, earliest registration first on ties,
     provided it is above ``low_confidence``.
  3. Otherwise nothing is selected and the fallback chain takes over.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pageshape.settings import DEFAULT_CONFIG, DetectionWeights, ExtractionConfig

if TYPE_CHECKING:
    from pageshape.extractors.context import DocumentContext
    from pageshape.templates import Template, TemplateRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectionSignals:
    """Declarative evidence that a page has a given shape."""

    url_patterns: tuple[str, ...] = ()
    selectors: tuple[str, ...] = ()
    required_elements: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class SignalBreakdown:
    """Per-group hit counts behind a score, for diagnostics and tests."""

    url_hits: int = 0
    selector_hits: int = 0
    required_hits: int = 0
    keyword_hits: int = 0
    score: float = 0.0


@dataclass(frozen=True)
class Detection:
    """Outcome of ranking the registry against one document."""

    template: Template | None
    confidence: float
    scores: dict[str, float] = field(default_factory=dict)

    @property
    def name(self) -> str | None:
        return self.template.name if self.template else None


def _group_score(hits: int, size: int, weight: float) -> float:
    if size == 0:
        return 0.0
    return min(1.0, hits / size) * weight


def breakdown_signals(
    ctx: DocumentContext,
    signals: DetectionSignals,
    weights: DetectionWeights | None = None,
) -> SignalBreakdown:
    """Count hits for each signal group and combine them into a score."""
    weights = weights or DEFAULT_CONFIG.weights
    url = ctx.url.lower()

    url_hits = sum(1 for p in signals.url_patterns if p.lower() in url) if url else 0
    selector_hits = sum(1 for s in signals.selectors if ctx.exists(s))
    required_hits = sum(1 for s in signals.required_elements if ctx.exists(s))
    keyword_hits = sum(1 for k in signals.keywords if ctx.search(k))

    score = (
        _group_score(selector_hits, len(signals.selectors), weights.selectors)
        + _group_score(required_hits, len(signals.required_elements), weights.required)
        + _group_score(url_hits, len(signals.url_patterns), weights.url)
        + _group_score(keyword_hits, len(signals.keywords), weights.keywords)
    )
    return SignalBreakdown(
        url_hits=url_hits,
        selector_hits=selector_hits,
        required_hits=required_hits,
        keyword_hits=keyword_hits,
        score=max(0.0, min(1.0, score)),
    )


def score_signals(
    ctx: DocumentContext,
    signals: DetectionSignals,
    weights: DetectionWeights | None = None,
) -> float:
    """Confidence in [0, 1] that *ctx* matches *signals*.  Never raises."""
    try:
        return breakdown_signals(ctx, signals, weights).score
    except Exception as exc:
        logger.warning("Signal scoring failed for %s: %s", ctx.url, exc)
        return 0.0


def detect_best_template(
    ctx: DocumentContext,
    registry: TemplateRegistry,
    config: ExtractionConfig | None = None,
) -> Detection:
    """Rank *registry* against *ctx* and pick a template, or none."""
    config = config or DEFAULT_CONFIG
    scores: dict[str, float] = {}
    best: Template | None = None
    best_score = -1.0

    for template in registry:
        score = template.detect(ctx, config.weights)
        scores[template.name] = score
        logger.debug("template %s scored %.3f for %s", template.name, score, ctx.url)

        if score > config.high_confidence:
            logger.info(
                "Detected template %s (confidence %.2f, early exit) for %s",
                template.name, score, ctx.url,
            )
            return Detection(template=template, confidence=score, scores=scores)

        # strict comparison keeps the earliest template on ties
        if score > best_score:
            best, best_score = template, score

    if best is not None and best_score > config.low_confidence:
        logger.info(
            "Detected template %s (confidence %.2f) for %s", best.name, best_score, ctx.url,
        )
        return Detection(template=best, confidence=best_score, scores=scores)

    logger.info(
        "No template above %.2f for %s (best %.2f)",
        config.low_confidence, ctx.url, max(best_score, 0.0),
    )
    return Detection(template=None, confidence=0.0, scores=scores)
