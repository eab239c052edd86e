"""YAML extraction profiles: per-domain tuning of the engine.

A profile file looks like::

    default:
      low_confidence: 0.5
    domains:
      shop.example.com:
        template: ecommerce_product
      example.com:
        weights: {selectors: 0.4, required: 0.3, url: 0.2, keywords: 0.1}

The longest domain key that equals the URL's host, or is a parent domain of
it, wins and is layered over ``default``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, NamedTuple
from urllib.parse import urlparse

import yaml

from pageshape.settings import DEFAULT_CONFIG, ExtractionConfig

logger = logging.getLogger(__name__)

_SCALAR_KEYS: frozenset[str] = frozenset(
    {
        "high_confidence",
        "low_confidence",
        "readability_min_words",
        "trafilatura_min_words",
        "trafilatura_preference_ratio",
        "max_workers",
    },
)
_WEIGHT_KEYS: frozenset[str] = frozenset({"selectors", "required", "url", "keywords"})


class ProfileSettings(NamedTuple):
    config: ExtractionConfig
    template: str | None


def read_profile(path: str | Path) -> dict[str, Any]:
    """Parse a profile file; an empty file is an empty profile."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"profile {path} must be a mapping, got {type(data).__name__}")
    return data


def _weights_of(section: dict[str, Any]) -> dict[str, Any]:
    weights = section.get("weights") or {}
    if not isinstance(weights, dict):
        raise ValueError("profile 'weights' must be a mapping")
    return weights


def match_profile(data: dict[str, Any], url: str) -> dict[str, Any]:
    """Merge ``default`` with the best-matching ``domains`` entry for *url*.

    Raises:
        ValueError: If a ``weights`` entry that needs merging is not a mapping.
    """
    default = data.get("default") or {}
    domains = data.get("domains") or {}

    host = (urlparse(url).hostname or "").lower()
    best_key = ""
    best_cfg: dict[str, Any] = {}
    if host and isinstance(domains, dict):
        for key, cfg in domains.items():
            if not isinstance(key, str) or not isinstance(cfg, dict):
                continue
            key_lower = key.lower()
            matches = host == key_lower or host.endswith("." + key_lower)
            if matches and len(key_lower) > len(best_key):
                best_key, best_cfg = key_lower, cfg

    merged: dict[str, Any] = {}
    if isinstance(default, dict):
        merged.update(default)
    if best_cfg:
        logger.debug("Profile domain %s applies to %s", best_key, url)
        weights = {**_weights_of(merged), **_weights_of(best_cfg)}
        merged.update(best_cfg)
        if weights:
            merged["weights"] = weights
    return merged


def load_profile(path: str | Path, url: str) -> dict[str, Any]:
    """Load YAML profile and return merged settings for the given URL."""
    return match_profile(read_profile(path), url)


def config_from_profile(
    profile: dict[str, Any],
    base: ExtractionConfig | None = None,
) -> ProfileSettings:
    """Build an :class:`ExtractionConfig` (and pinned template) from a merged profile.

    Raises:
        ValueError: If the resulting weights or thresholds are invalid.
    """
    base = base or DEFAULT_CONFIG
    overrides: dict[str, Any] = {}

    for key, value in profile.items():
        if key in _SCALAR_KEYS:
            overrides[key] = value
        elif key not in ("weights", "template"):
            logger.warning("Ignoring unknown profile key %r", key)

    weights = profile.get("weights")
    if weights:
        if not isinstance(weights, dict):
            raise ValueError("profile 'weights' must be a mapping")
        unknown = set(weights) - _WEIGHT_KEYS
        if unknown:
            raise ValueError(f"unknown detection weights: {sorted(unknown)}")
        overrides["weights"] = replace(base.weights, **weights)

    template = profile.get("template")
    return ProfileSettings(
        config=replace(base, **overrides) if overrides else base,
        template=str(template) if template else None,
    )
