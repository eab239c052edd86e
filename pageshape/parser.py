"""pageshape.parser — High-level PageParser class.

Bundles a template registry, an extraction config and an optional YAML
profile into one reusable object.

Usage::

    from pageshape import PageParser

    parser = PageParser()
    record = parser.parse(html, url="https://example.com/recipes/soup")

    # Per-domain tuning from a profile file
    parser = PageParser(profile="profiles.yaml")
    records = parser.parse_many([(html_a, url_a), (html_b, url_b)])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from pageshape.engine import extract, extract_batch
from pageshape.items import ExtractedRecord
from pageshape.profiles import config_from_profile, match_profile, read_profile
from pageshape.settings import DEFAULT_CONFIG, ExtractionConfig
from pageshape.templates import TemplateRegistry, default_registry

logger = logging.getLogger(__name__)


class PageParser:
    """Reusable extraction front-end.

    Args:
        registry: Templates to consider (default: the built-in ten).
        config:   Base configuration; profile entries are layered over it.
        profile:  Path to a YAML profile.  The file is read once here; the
                  matching domain section is applied per URL.
    """

    def __init__(
        self,
        registry: TemplateRegistry | None = None,
        config: ExtractionConfig | None = None,
        profile: str | Path | None = None,
    ) -> None:
        self._registry = registry if registry is not None else default_registry()
        self._config = config or DEFAULT_CONFIG
        self._profile: dict[str, Any] | None = read_profile(profile) if profile else None

    @property
    def registry(self) -> TemplateRegistry:
        return self._registry

    @property
    def config(self) -> ExtractionConfig:
        return self._config

    def settings_for(self, url: str) -> tuple[ExtractionConfig, str | None]:
        """Effective config and pinned template for *url*."""
        if self._profile is None:
            return self._config, None
        settings = config_from_profile(match_profile(self._profile, url), self._config)
        return settings.config, settings.template

    def parse(self, html: str, url: str = "", template: str | None = None) -> ExtractedRecord:
        """Extract one page.  An explicit *template* overrides the profile's."""
        config, pinned = self.settings_for(url)
        return extract(
            html,
            url,
            template=template or pinned,
            registry=self._registry,
            config=config,
        )

    def parse_many(
        self,
        pages: Iterable[tuple[str, str]],
        max_workers: int | None = None,
    ) -> list[ExtractedRecord]:
        """Extract many ``(html, url)`` pages concurrently, in input order."""
        items = list(pages)
        if self._profile is None:
            return extract_batch(
                items, registry=self._registry, config=self._config, max_workers=max_workers,
            )
        # profiles can differ per page, so each page gets its own settings
        workers = max_workers or self._config.max_workers
        with ThreadPoolExecutor(max_workers=max(1, min(workers, len(items) or 1))) as executor:
            return list(executor.map(lambda page: self.parse(page[0], page[1]), items))
