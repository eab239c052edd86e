"""Events: concerts, conferences, meetups."""

from __future__ import annotations

from pageshape.extractors.detection import DetectionSignals
from pageshape.extractors.schema import field
from pageshape.extractors.transforms import parse_count, parse_date, parse_price
from pageshape.extractors.validation import FieldValidation, is_url
from pageshape.templates.base import Template

SIGNALS = DetectionSignals(
    url_patterns=("/event/", "/events/", "/ticket/", "/show/", "/concert/", "/conference/"),
    selectors=(
        '[itemtype*="Event"]',
        '[itemtype*="schema.org/Event"]',
        ".event-details",
        ".event-info",
        ".event-page",
        ".event-wrapper",
    ),
    required_elements=(
        ".event-date",
        '[itemprop="startDate"]',
        ".event-time",
        ".event-location",
        '[itemprop="location"]',
        ".venue",
    ),
    keywords=(
        "tickets",
        "register",
        "rsvp",
        "venue",
        "doors open",
        "starts at",
        "admission",
        "event",
    ),
)

SCHEMA = {
    "title": field(
        'h1[itemprop="name"]', ".event-title", "h1.event-name", ".event-header h1", "[data-event-name]",
    ),
    "start_date": field(
        '[itemprop="startDate"]', ".event-date", ".start-date", ".event-start", "time[datetime]",
        transform=parse_date,
    ),
    "end_date": field(
        '[itemprop="endDate"]', ".end-date", ".event-end", ".finish-time",
        transform=parse_date,
    ),
    "location": field(
        '[itemprop="location"]', ".event-location", ".venue-name", ".event-venue", "[data-venue]",
    ),
    "address": field(
        '[itemprop="address"]',
        ".venue-address",
        ".event-address",
        ".location-details",
        ".street-address",
    ),
    "price": field(
        ".ticket-price", ".event-price", ".admission-fee", '[itemprop="price"]',
        transform=parse_price,
    ),
    "description": field(
        '[itemprop="description"]',
        ".event-description",
        ".event-details",
        ".event-summary",
        "#event-description",
    ),
    "organizer": field(
        '[itemprop="organizer"]',
        ".event-organizer",
        ".hosted-by",
        ".presented-by",
        ".organizer-name",
    ),
    "performers": field(
        '[itemprop="performer"]',
        ".performer",
        ".artist-name",
        ".lineup li",
        ".performers-list li",
        multiple=True,
    ),
    "ticket_url": field(
        ".ticket-link", ".buy-tickets", ".register-button", '[href*="ticket"]', '[href*="register"]',
        attribute="href",
    ),
    "available_tickets": field(
        ".tickets-remaining", ".seats-available", ".availability-count",
        transform=parse_count,
    ),
    "event_type": field(".event-type", ".event-category", '[itemprop="eventType"]', ".event-format"),
    "age_restriction": field(".age-limit", ".age-restriction", ".minimum-age", ".age-requirement"),
    "image": field(
        '[itemprop="image"]', ".event-image img", ".event-banner img", ".event-poster img",
        attribute="src",
    ),
    "status": field(
        '[itemprop="eventStatus"]', ".event-status", ".ticket-status", ".availability-status",
    ),
    "duration": field(".event-duration", ".runtime", ".event-length", ".duration"),
    "tags": field(
        ".event-tag", ".event-tags a", ".category-tag", '[rel="tag"]',
        multiple=True,
    ),
}

VALIDATION = {
    "title": FieldValidation(required=True, min_length=2, max_length=300),
    "start_date": FieldValidation(required=True),
    "ticket_url": FieldValidation(validator=is_url),
}

TEMPLATE = Template(
    name="event",
    description="Extract event information including date, location, and ticketing",
    signals=SIGNALS,
    schema=SCHEMA,
    validation=VALIDATION,
)
