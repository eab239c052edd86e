"""Built-in page-shape templates.

:func:`default_registry` returns the ten shapes in their canonical order;
that order breaks ties during detection.
"""

from __future__ import annotations

from pageshape.templates import (
    article,
    documentation,
    ecommerce_product,
    event,
    forum_thread,
    job_listing,
    real_estate,
    recipe,
    social_profile,
    video_media,
)
from pageshape.templates.base import Template, TemplateRegistry, UnknownTemplateError

BUILTIN_TEMPLATES: tuple[Template, ...] = (
    ecommerce_product.TEMPLATE,
    article.TEMPLATE,
    recipe.TEMPLATE,
    job_listing.TEMPLATE,
    event.TEMPLATE,
    real_estate.TEMPLATE,
    social_profile.TEMPLATE,
    video_media.TEMPLATE,
    forum_thread.TEMPLATE,
    documentation.TEMPLATE,
)

_DEFAULT_REGISTRY = TemplateRegistry(BUILTIN_TEMPLATES)


def default_registry() -> TemplateRegistry:
    """The built-in registry.  Immutable, so a single shared instance is safe."""
    return _DEFAULT_REGISTRY


__all__ = [
    "BUILTIN_TEMPLATES",
    "Template",
    "TemplateRegistry",
    "UnknownTemplateError",
    "default_registry",
]
