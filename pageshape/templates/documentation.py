"""Technical documentation and API reference pages."""

from __future__ import annotations

from pageshape.extractors.detection import DetectionSignals
from pageshape.extractors.schema import field
from pageshape.extractors.transforms import as_flag, parse_minutes
from pageshape.extractors.validation import FieldValidation
from pageshape.templates.base import Template

SIGNALS = DetectionSignals(
    url_patterns=("/docs/", "/documentation/", "/api/", "/reference/", "/guide/", "/manual/"),
    selectors=(
        '[itemtype*="TechArticle"]',
        '[itemtype*="APIReference"]',
        ".documentation",
        ".docs-content",
        ".api-documentation",
        ".reference-content",
    ),
    required_elements=("pre", "code", ".code-block", ".syntax", ".parameter", ".method-signature"),
    keywords=(
        "parameters",
        "returns",
        "example",
        "syntax",
        "usage",
        "installation",
        "configuration",
        "api",
    ),
)

SCHEMA = {
    "title": field(
        'h1[itemprop="headline"]', ".doc-title", ".page-title", "h1.title", "[data-doc-title]",
    ),
    "version": field(".version", ".doc-version", ".api-version", "[data-version]", ".release-version"),
    "last_updated": field(
        ".last-updated", ".modified-date", ".doc-updated", "time[datetime]", "[data-last-modified]",
    ),
    "content": field(
        '[itemprop="articleBody"]',
        ".doc-content",
        ".documentation-content",
        ".reference-content",
        "main .content",
    ),
    "code_blocks": field(
        "pre code", ".code-block", ".highlight pre", ".syntax-highlight",
        multiple=True,
    ),
    "parameters": field(
        ".parameter", ".param", ".api-parameter", ".method-param", "dl.parameters dt",
        multiple=True,
    ),
    "return_value": field(".return-value", ".returns", ".method-returns", ".api-response", ".output"),
    "examples": field(
        ".example", ".code-example", ".usage-example", ".sample-code",
        multiple=True,
    ),
    "installation": field(
        ".installation", ".setup", ".getting-started", ".install-instructions", "#installation",
    ),
    "prerequisites": field(
        ".prerequisites", ".requirements", ".dependencies", ".system-requirements",
        multiple=True,
    ),
    "related_topics": field(
        ".related-topics a", ".see-also a", ".related-links a", ".further-reading a",
        multiple=True,
    ),
    "table_of_contents": field(
        ".toc", ".table-of-contents", ".nav-sidebar", ".doc-nav",
        multiple=True,
    ),
    "breadcrumbs": field(
        ".breadcrumb", ".breadcrumbs", 'nav[aria-label="breadcrumb"]',
        multiple=True,
    ),
    "tags": field(
        ".doc-tag", ".topic-tag", ".category-tag", '[rel="tag"]',
        multiple=True,
    ),
    "language": field(
        ".programming-language", ".code-language", ".syntax-language", "[data-language]",
    ),
    "framework": field(".framework", ".platform", ".technology", "[data-framework]"),
    "difficulty": field(".difficulty", ".level", ".complexity", "[data-difficulty]"),
    "time_to_read": field(
        ".reading-time", ".time-to-complete", ".estimated-time", "[data-reading-time]",
        transform=parse_minutes,
    ),
    "deprecated": field(
        ".deprecated", ".obsolete", ".legacy",
        contains=("deprecated", "obsolete", "legacy", "no longer supported"),
        transform=as_flag,
    ),
    "warnings": field(
        ".warning", ".alert", ".caution", ".important",
        multiple=True,
    ),
    "notes": field(
        ".note", ".info", ".tip", ".hint",
        multiple=True,
    ),
}

VALIDATION = {
    "title": FieldValidation(required=True, min_length=2, max_length=300),
    "code_blocks": FieldValidation(max_length=100),
}

TEMPLATE = Template(
    name="documentation",
    description="Extract technical documentation and API reference information",
    signals=SIGNALS,
    schema=SCHEMA,
    validation=VALIDATION,
)
