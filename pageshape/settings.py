"""Engine settings for pageshape.

Module-level defaults read by :class:`ExtractionConfig`.  The detection
weights and confidence thresholds are tuning constants, not derived values:
adjust them against a fixture corpus and keep the four weights summing to 1.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Detection weights (must sum to 1.0)
# ---------------------------------------------------------------------------
SELECTOR_WEIGHT = 0.35
REQUIRED_WEIGHT = 0.30
URL_WEIGHT = 0.20
KEYWORD_WEIGHT = 0.15

# ---------------------------------------------------------------------------
# Template selection thresholds
# ---------------------------------------------------------------------------
# A score strictly above this stops the registry scan immediately.
HIGH_CONFIDENCE = 0.85
# The best score must be strictly above this for a template to be selected.
LOW_CONFIDENCE = 0.5

# ---------------------------------------------------------------------------
# Readability stage
# ---------------------------------------------------------------------------
READABILITY_MIN_WORDS = 50
TRAFILATURA_MIN_WORDS = 30
# trafilatura replaces readability when it yields this many times more words
TRAFILATURA_PREFERENCE_RATIO = 1.4

# ---------------------------------------------------------------------------
# Batch extraction
# ---------------------------------------------------------------------------
DEFAULT_MAX_WORKERS = os.cpu_count() or 4

_WEIGHT_TOLERANCE = 1e-6


@dataclass(frozen=True)
class DetectionWeights:
    """Per-group weights for the detection scorer."""

    selectors: float = SELECTOR_WEIGHT
    required: float = REQUIRED_WEIGHT
    url: float = URL_WEIGHT
    keywords: float = KEYWORD_WEIGHT

    def __post_init__(self) -> None:
        values = (self.selectors, self.required, self.url, self.keywords)
        if any(v < 0 for v in values):
            raise ValueError(f"detection weights must be non-negative: {values}")
        total = sum(values)
        if abs(total - 1.0) > _WEIGHT_TOLERANCE:
            raise ValueError(f"detection weights must sum to 1.0, got {total:.6f}")


@dataclass(frozen=True)
class ExtractionConfig:
    """Immutable bundle of every tunable the engine reads.

    Passed explicitly into each extraction call so concurrent calls never
    share mutable configuration.
    """

    weights: DetectionWeights = field(default_factory=DetectionWeights)
    high_confidence: float = HIGH_CONFIDENCE
    low_confidence: float = LOW_CONFIDENCE
    readability_min_words: int = READABILITY_MIN_WORDS
    trafilatura_min_words: int = TRAFILATURA_MIN_WORDS
    trafilatura_preference_ratio: float = TRAFILATURA_PREFERENCE_RATIO
    max_workers: int = DEFAULT_MAX_WORKERS

    def __post_init__(self) -> None:
        for name in ("high_confidence", "low_confidence"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.low_confidence > self.high_confidence:
            raise ValueError(
                "low_confidence must not exceed high_confidence "
                f"({self.low_confidence} > {self.high_confidence})",
            )
        if self.readability_min_words < 1 or self.trafilatura_min_words < 1:
            raise ValueError("word minimums must be >= 1")
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")


DEFAULT_CONFIG = ExtractionConfig()
