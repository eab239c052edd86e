"""Property listings for sale or rent."""

from __future__ import annotations

from pageshape.extractors.detection import DetectionSignals
from pageshape.extractors.schema import field
from pageshape.extractors.transforms import parse_count, parse_decimal, parse_price
from pageshape.extractors.validation import FieldValidation, is_numeric
from pageshape.templates.base import Template

SIGNALS = DetectionSignals(
    url_patterns=("/property/", "/listing/", "/home/", "/real-estate/", "/mls/", "/for-sale/"),
    selectors=(
        '[itemtype*="RealEstateListing"]',
        '[itemtype*="schema.org/Residence"]',
        ".property-details",
        ".listing-details",
        ".property-info",
        ".real-estate-listing",
    ),
    required_elements=(
        ".price",
        '[itemprop="price"]',
        ".listing-price",
        ".property-price",
        ".bedrooms",
        ".bathrooms",
        ".sqft",
    ),
    keywords=(
        "bedrooms",
        "bathrooms",
        "square feet",
        "sqft",
        "for sale",
        "for rent",
        "mls",
        "property type",
    ),
)

SCHEMA = {
    "title": field(
        'h1[itemprop="name"]',
        ".property-title",
        ".listing-title",
        "h1.property-address",
        ".property-header h1",
    ),
    "price": field(
        '[itemprop="price"]', ".listing-price", ".property-price", ".price-display", "[data-price]",
        transform=parse_price,
    ),
    "address": field(
        '[itemprop="address"]',
        ".property-address",
        ".listing-address",
        ".full-address",
        ".street-address",
    ),
    "bedrooms": field(
        ".bedrooms", ".beds", "[data-bedrooms]", ".bedroom-count",
        transform=parse_count,
    ),
    "bathrooms": field(
        ".bathrooms", ".baths", "[data-bathrooms]", ".bathroom-count",
        transform=parse_decimal,
    ),
    "square_feet": field(
        ".sqft", ".square-feet", ".living-area", "[data-sqft]", ".property-size",
        transform=parse_count,
    ),
    "property_type": field(
        ".property-type", ".listing-type", '[itemprop="propertyType"]', ".home-type", ".style",
    ),
    "description": field(
        '[itemprop="description"]',
        ".property-description",
        ".listing-description",
        ".property-details",
        "#description",
    ),
    "year_built": field(
        ".year-built", ".built-year", "[data-year-built]", ".construction-year",
        transform=parse_count,
    ),
    "lot_size": field(".lot-size", ".lot-area", ".land-size", "[data-lot-size]", ".acreage"),
    "mls_number": field(".mls-number", ".listing-id", ".mls-id", "[data-mls]", ".property-id"),
    "listing_agent": field(
        ".listing-agent", ".agent-name", ".realtor-name", '[itemprop="agent"]', ".broker-name",
    ),
    "features": field(
        ".property-features li", ".amenities li", ".feature-list li", ".home-features li",
        multiple=True,
    ),
    "images": field(
        ".property-images img", ".gallery img", ".listing-photos img", '[itemprop="image"]',
        attribute="src",
        multiple=True,
    ),
    # "3d-tour" is not a valid class selector, hence the attribute form
    "virtual_tour_url": field(
        ".virtual-tour", '[class~="3d-tour"]', '[href*="virtual"]', '[href*="tour"]',
        attribute="href",
    ),
    "status": field(".listing-status", ".property-status", ".sale-status", "[data-status]"),
    "hoa_fees": field(
        ".hoa-fee", ".hoa-dues", ".association-fee", ".monthly-hoa",
        transform=parse_price,
    ),
    "parking": field(".parking", ".garage", ".parking-spaces", ".parking-info"),
    "heating": field(".heating", ".heating-type", ".heat-type", ".heating-system"),
    "cooling": field(".cooling", ".ac", ".air-conditioning", ".cooling-system"),
    "taxes": field(
        ".property-taxes", ".annual-taxes", ".tax-amount", "[data-taxes]",
        transform=parse_price,
    ),
}

VALIDATION = {
    "title": FieldValidation(required=True, min_length=2, max_length=300),
    "price": FieldValidation(required=True, validator=is_numeric),
    "year_built": FieldValidation(validator=lambda year: 1600 <= year <= 2100),
}

TEMPLATE = Template(
    name="real_estate",
    description="Extract real estate property listing information",
    signals=SIGNALS,
    schema=SCHEMA,
    validation=VALIDATION,
)
