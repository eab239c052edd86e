"""User and channel profile pages on social sites."""

from __future__ import annotations

from pageshape.extractors.detection import DetectionSignals
from pageshape.extractors.schema import field
from pageshape.extractors.transforms import as_flag, parse_count
from pageshape.extractors.validation import FieldValidation, is_url
from pageshape.templates.base import Template

SIGNALS = DetectionSignals(
    url_patterns=("/profile/", "/user/", "/@", "/u/", "/people/", "/member/", "/channel/"),
    selectors=(
        '[itemtype*="Person"]',
        '[itemtype*="schema.org/Person"]',
        ".profile-info",
        ".user-profile",
        ".profile-header",
        ".member-info",
    ),
    required_elements=(
        ".username",
        '[itemprop="name"]',
        ".profile-name",
        ".user-name",
        ".follower-count",
        ".following-count",
        ".bio",
    ),
    keywords=("followers", "following", "posts", "tweets", "subscribers", "joined", "bio", "about"),
)

SCHEMA = {
    "username": field(
        ".username", ".profile-username", ".user-handle", '[itemprop="alternateName"]', ".screen-name",
    ),
    "display_name": field(
        '[itemprop="name"]', ".display-name", ".profile-name", ".full-name", ".user-full-name",
    ),
    "bio": field(
        '[itemprop="description"]', ".bio", ".profile-bio", ".user-description", ".about-section",
    ),
    "profile_image": field(
        ".profile-image img", ".avatar img", ".profile-pic img", '[itemprop="image"]', ".user-photo img",
        attribute="src",
    ),
    "cover_image": field(
        ".cover-image img", ".banner img", ".header-image img", ".profile-banner img",
        attribute="src",
    ),
    "followers": field(
        ".followers-count", ".follower-count", "[data-followers]", ".subscribers-count",
        transform=parse_count,
    ),
    "following": field(
        ".following-count", ".follows-count", "[data-following]", ".subscriptions-count",
        transform=parse_count,
    ),
    "posts": field(
        ".posts-count", ".post-count", ".tweets-count", ".video-count", "[data-posts]",
        transform=parse_count,
    ),
    "join_date": field(
        ".join-date", ".joined-date", ".member-since", ".created-at", '[itemprop="memberOf"]',
    ),
    "location": field(
        '[itemprop="address"]', ".location", ".user-location", ".profile-location", "[data-location]",
    ),
    "website": field(
        ".website", ".user-website", ".profile-link", '[itemprop="url"]', ".external-link",
        attribute="href",
    ),
    "verified": field(
        ".verified", ".verified-badge", ".verification-badge", "[data-verified]",
        contains=("verified", "official"),
        transform=as_flag,
    ),
    "occupation": field(
        '[itemprop="jobTitle"]', ".occupation", ".job-title", ".profession", ".work-info",
    ),
    "company": field(
        '[itemprop="worksFor"]', ".company", ".workplace", ".organization", ".employer",
    ),
    "education": field(
        ".education", ".school", ".university", ".studied-at", '[itemprop="alumniOf"]',
    ),
    "social_links": field(
        ".social-links a", ".external-links a", ".profile-links a", ".social-media a",
        attribute="href",
        multiple=True,
    ),
}

VALIDATION = {
    "display_name": FieldValidation(required=True, max_length=200),
    "bio": FieldValidation(max_length=2000),
    "website": FieldValidation(validator=is_url),
}

TEMPLATE = Template(
    name="social_profile",
    description="Extract social media profile information",
    signals=SIGNALS,
    schema=SCHEMA,
    validation=VALIDATION,
)
