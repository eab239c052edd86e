"""Articles, blog posts and news stories."""

from __future__ import annotations

from pageshape.extractors.detection import DetectionSignals
from pageshape.extractors.schema import field
from pageshape.extractors.transforms import parse_count, parse_date, parse_minutes
from pageshape.extractors.validation import FieldValidation, is_clean
from pageshape.templates.base import Template

SIGNALS = DetectionSignals(
    url_patterns=("/article/", "/blog/", "/post/", "/news/", "/story/", "/entry/"),
    selectors=(
        "article",
        '[itemtype*="Article"]',
        '[itemtype*="BlogPosting"]',
        '[itemtype*="NewsArticle"]',
        ".post-content",
        ".article-content",
        "main article",
    ),
    required_elements=(
        ".author",
        '[itemprop="author"]',
        ".byline",
        ".post-author",
        ".article-author",
        "time",
        ".publish-date",
    ),
    keywords=(
        "published",
        "written by",
        "author",
        "min read",
        "share",
        "comments",
        "posted on",
        "updated",
    ),
)

SCHEMA = {
    "title": field(
        'h1[itemprop="headline"]',
        "h1.article-title",
        ".post-title",
        "h1.entry-title",
        "article h1",
        "main h1",
    ),
    "author": field(
        '[itemprop="author"]',
        ".author-name",
        ".byline a",
        ".post-author",
        ".article-author",
        'span[rel="author"]',
    ),
    "publish_date": field(
        '[itemprop="datePublished"]',
        "time[datetime]",
        ".publish-date",
        ".post-date",
        ".article-date",
        ".entry-date",
        transform=parse_date,
    ),
    "modified_date": field(
        '[itemprop="dateModified"]', ".modified-date", ".updated-date", ".last-updated",
        transform=parse_date,
    ),
    "content": field(
        '[itemprop="articleBody"]',
        ".article-content",
        ".post-content",
        ".entry-content",
        "article .content",
        "main .content",
    ),
    "summary": field(
        '[itemprop="description"]',
        ".article-summary",
        ".excerpt",
        ".post-excerpt",
        ".article-description",
        'meta[name="description"]',
    ),
    "tags": field(
        ".tag",
        ".category",
        '[rel="tag"]',
        ".post-tags a",
        ".article-tags a",
        ".topics a",
        multiple=True,
    ),
    "read_time": field(
        ".reading-time", ".min-read", ".read-time", ".time-to-read", '[itemprop="timeRequired"]',
        transform=parse_minutes,
    ),
    "image": field(
        '[itemprop="image"]',
        ".featured-image img",
        ".post-thumbnail img",
        "article img:first-of-type",
        'meta[property="og:image"]',
        attribute="src",
    ),
    "comment_count": field(
        ".comment-count", ".comments-count", ".discussion-count",
        transform=parse_count,
    ),
}

VALIDATION = {
    "title": FieldValidation(required=True, min_length=2, max_length=300, validator=is_clean),
    "author": FieldValidation(max_length=200),
    "summary": FieldValidation(max_length=1000),
    "tags": FieldValidation(max_length=30),
}

TEMPLATE = Template(
    name="article",
    description="Extract article and blog post content",
    signals=SIGNALS,
    schema=SCHEMA,
    validation=VALIDATION,
    article_like=True,
)
