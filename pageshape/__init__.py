"""pageshape - template-based structured extraction from HTML pages.

Quick usage::

    from pageshape import extract

    record = extract(html, url="https://example.com/blog/some-post")
    print(record.template, record.confidence)
    print(record.fields["author"])
    print(record.content_markdown)

Custom templates::

    from pageshape import Template, default_registry
    from pageshape.extractors import DetectionSignals
    from pageshape.extractors.schema import field

    changelog = Template(
        name="changelog",
        description="Release notes",
        signals=DetectionSignals(url_patterns=("/releases/",), selectors=(".release",)),
        schema={"version": field(".release h2")},
    )
    registry = default_registry().with_template(changelog)
    record = extract(html, url, registry=registry)
"""

from pageshape.engine import extract, extract_batch
from pageshape.items import ExtractedRecord
from pageshape.parser import PageParser
from pageshape.settings import DetectionWeights, ExtractionConfig
from pageshape.templates import (
    Template,
    TemplateRegistry,
    UnknownTemplateError,
    default_registry,
)

__version__ = "0.1.0"
__all__ = [
    "DetectionWeights",
    "ExtractedRecord",
    "ExtractionConfig",
    "PageParser",
    "Template",
    "TemplateRegistry",
    "UnknownTemplateError",
    "default_registry",
    "extract",
    "extract_batch",
]
