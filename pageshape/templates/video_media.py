"""Video watch pages and media players."""

from __future__ import annotations

from pageshape.extractors.detection import DetectionSignals
from pageshape.extractors.schema import field
from pageshape.extractors.transforms import as_flag, parse_count, parse_date
from pageshape.extractors.validation import FieldValidation, is_url
from pageshape.templates.base import Template

SIGNALS = DetectionSignals(
    url_patterns=("/watch", "/video/", "/v/", "/videos/", "/player/", "/embed/", "/clip/"),
    selectors=(
        '[itemtype*="VideoObject"]',
        '[itemtype*="schema.org/VideoObject"]',
        ".video-player",
        ".video-container",
        ".player-wrapper",
        "video",
    ),
    required_elements=(
        ".video-title",
        '[itemprop="name"]',
        ".watch-title",
        ".view-count",
        ".video-views",
        ".video-duration",
    ),
    keywords=("views", "likes", "subscribe", "watch", "duration", "published", "comments", "share"),
)

SCHEMA = {
    "title": field(
        'h1[itemprop="name"]', ".video-title", ".watch-title", "h1.title", "[data-video-title]",
    ),
    "channel": field(
        '[itemprop="author"]', ".channel-name", ".uploader-name", ".creator-name", ".publisher-name",
    ),
    "views": field(
        ".view-count", ".video-views", ".watch-view-count", "[data-view-count]",
        transform=parse_count,
    ),
    "likes": field(
        ".like-count", ".likes-count", "[data-like-count]", ".video-likes",
        transform=parse_count,
    ),
    "dislikes": field(
        ".dislike-count", ".dislikes-count", "[data-dislike-count]",
        transform=parse_count,
    ),
    "duration": field(
        '[itemprop="duration"]', ".video-duration", ".duration", ".runtime", "[data-duration]",
    ),
    "upload_date": field(
        '[itemprop="uploadDate"]', ".upload-date", ".published-date", ".video-date", "time[datetime]",
        transform=parse_date,
    ),
    "description": field(
        '[itemprop="description"]',
        ".video-description",
        ".description-box",
        ".video-info-description",
        "#description",
    ),
    "thumbnail_url": field(
        '[itemprop="thumbnailUrl"]', ".video-thumbnail img", ".thumbnail img", 'meta[property="og:image"]',
        attribute="src",
    ),
    "embed_url": field(
        '[itemprop="embedUrl"]', ".embed-link", "[data-embed-url]",
        attribute="content",
    ),
    "comment_count": field(
        ".comment-count", ".comments-count", "[data-comment-count]",
        transform=parse_count,
    ),
    "category": field(".video-category", ".category", '[itemprop="genre"]', ".video-genre"),
    "tags": field(
        ".video-tag", ".video-tags a", ".tag-list a", '[rel="tag"]', ".hashtag",
        multiple=True,
    ),
    "quality": field(".video-quality", ".resolution", ".quality-label", "[data-quality]"),
    "language": field(
        ".video-language", ".audio-language", '[itemprop="inLanguage"]', ".language",
    ),
    "subtitles": field(
        ".subtitles-available", ".captions", ".cc-available",
        contains=("subtitles", "captions", "cc"),
        transform=as_flag,
    ),
    "is_live": field(
        ".live-indicator", ".is-live", ".live-badge", "[data-live]",
        contains=("live", "streaming"),
        transform=as_flag,
    ),
    "transcript": field(".transcript", ".video-transcript", ".captions-text", ".subtitle-text"),
}

VALIDATION = {
    "title": FieldValidation(required=True, min_length=2, max_length=300),
    "thumbnail_url": FieldValidation(validator=is_url),
    "embed_url": FieldValidation(validator=is_url),
}

TEMPLATE = Template(
    name="video_media",
    description="Extract video and media content information",
    signals=SIGNALS,
    schema=SCHEMA,
    validation=VALIDATION,
)
