"""Forum threads and Q&A discussions."""

from __future__ import annotations

from pageshape.extractors.detection import DetectionSignals
from pageshape.extractors.schema import field
from pageshape.extractors.transforms import as_flag, parse_count, parse_date
from pageshape.extractors.validation import FieldValidation
from pageshape.templates.base import Template

SIGNALS = DetectionSignals(
    url_patterns=("/thread/", "/topic/", "/discussion/", "/forum/", "/t/", "/posts/", "/question/"),
    selectors=(
        '[itemtype*="DiscussionForumPosting"]',
        '[itemtype*="QAPage"]',
        ".thread-content",
        ".topic-container",
        ".discussion-thread",
        ".forum-post",
    ),
    required_elements=(
        ".post-author",
        ".thread-title",
        ".topic-title",
        ".reply-count",
        ".post-content",
        ".message-content",
    ),
    keywords=(
        "replies",
        "posts",
        "members",
        "joined",
        "posted",
        "last reply",
        "views",
        "topic starter",
    ),
)

SCHEMA = {
    "title": field(
        'h1[itemprop="name"]', ".thread-title", ".topic-title", "h1.discussion-title", "[data-thread-title]",
    ),
    "author": field(
        '[itemprop="author"]', ".thread-starter", ".topic-author", ".original-poster", ".post-author",
    ),
    "content": field(
        '[itemprop="articleBody"]', ".first-post-content", ".thread-content", ".original-post", ".post-body",
    ),
    "replies": field(
        ".reply", ".post:not(:first-child)", ".forum-reply", ".response", ".comment",
        multiple=True,
    ),
    "reply_count": field(
        ".reply-count", ".replies-count", ".response-count", "[data-reply-count]",
        transform=parse_count,
    ),
    "view_count": field(
        ".view-count", ".views-count", ".thread-views", "[data-view-count]",
        transform=parse_count,
    ),
    "created_date": field(
        '[itemprop="dateCreated"]', ".post-date", ".thread-date", ".created-date", "time[datetime]",
        transform=parse_date,
    ),
    "last_reply_date": field(
        ".last-reply-date", ".last-post-date", ".latest-reply", ".last-activity", "[data-last-reply]",
    ),
    "category": field(
        ".forum-category", ".thread-category", ".board-name", '[itemprop="articleSection"]', ".topic-category",
    ),
    "tags": field(
        ".thread-tag", ".topic-tag", ".forum-tags a", '[rel="tag"]', ".label",
        multiple=True,
    ),
    "status": field(".thread-status", ".topic-status", ".discussion-status", "[data-status]"),
    "is_pinned": field(
        ".pinned", ".sticky", ".featured", ".announcement",
        contains=("pinned", "sticky", "featured", "announcement"),
        transform=as_flag,
    ),
    "is_locked": field(
        ".locked", ".closed", ".archived",
        contains=("locked", "closed", "archived", "no new replies"),
        transform=as_flag,
    ),
    "is_solved": field(
        ".solved", ".answered", ".resolved", ".solution",
        contains=("solved", "answered", "resolved", "solution"),
        transform=as_flag,
    ),
    "participants": field(
        ".participant", ".poster", ".contributor", ".thread-participant",
        multiple=True,
    ),
    "best_answer": field(
        ".best-answer", ".accepted-answer", ".solution-post", '[itemprop="acceptedAnswer"]',
    ),
    "votes": field(
        ".vote-count", ".votes", ".score", "[data-votes]",
        transform=parse_count,
    ),
}

VALIDATION = {
    "title": FieldValidation(required=True, min_length=2, max_length=300),
    "replies": FieldValidation(max_length=200),
}

TEMPLATE = Template(
    name="forum_thread",
    description="Extract forum thread and discussion information",
    signals=SIGNALS,
    schema=SCHEMA,
    validation=VALIDATION,
)
