"""Product detail pages."""

from __future__ import annotations

from pageshape.extractors.detection import DetectionSignals
from pageshape.extractors.schema import field
from pageshape.extractors.transforms import parse_count, parse_decimal, parse_price
from pageshape.extractors.validation import FieldValidation, is_numeric, is_url
from pageshape.templates.base import Template

SIGNALS = DetectionSignals(
    url_patterns=("/product/", "/item/", "/p/", "/dp/", "/products/", "-pd", "/buy/"),
    selectors=(
        '[itemtype*="Product"]',
        '[itemtype*="schema.org/Product"]',
        ".product-info",
        "#product-details",
        ".product-page",
        ".pdp-wrapper",
    ),
    required_elements=(
        ".price",
        '[itemprop="price"]',
        ".product-price",
        ".price-now",
        "[data-price]",
        ".pricing",
    ),
    keywords=(
        "add to cart",
        "buy now",
        "in stock",
        "out of stock",
        "quantity",
        "availability",
        "add to bag",
    ),
)

SCHEMA = {
    "title": field(
        'h1[itemprop="name"]',
        ".product-title",
        "h1.product-name",
        ".pdp-title h1",
        '[data-testid="product-title"]',
    ),
    "price": field(
        '[itemprop="price"]',
        ".price-now",
        ".product-price span",
        ".price-sales",
        "[data-price]",
        transform=parse_price,
    ),
    "original_price": field(
        ".price-was", ".price-original", "s.price", ".compare-at-price",
        transform=parse_price,
    ),
    "currency": field(
        '[itemprop="priceCurrency"]', ".currency-symbol",
        regex=r"[$£€¥₹]",
    ),
    "availability": field(
        ".availability",
        '[itemprop="availability"]',
        ".stock-status",
        ".in-stock",
        ".out-of-stock",
        contains=("in stock", "available", "out of stock", "unavailable"),
    ),
    "images": field(
        ".product-images img",
        '[itemprop="image"]',
        ".product-photo img",
        ".gallery-image img",
        '[data-testid="product-image"]',
        attribute="src",
        multiple=True,
    ),
    "description": field(
        '[itemprop="description"]',
        ".product-description",
        ".product-details",
        ".description-content",
        "#product-description",
    ),
    "sku": field('[itemprop="sku"]', ".product-code", ".item-number", "[data-sku]"),
    "brand": field('[itemprop="brand"]', ".brand-name", ".product-brand", "[data-brand]"),
    "rating": field(
        '[itemprop="ratingValue"]', ".star-rating", ".rating-stars", "[data-rating]",
        transform=parse_decimal,
    ),
    "review_count": field(
        ".review-count", '[itemprop="reviewCount"]', ".reviews-count",
        transform=parse_count,
    ),
    "variants": field(
        ".product-options", ".variant-selector", ".size-selector", ".color-selector",
        multiple=True,
    ),
    "features": field(
        ".product-features li", ".feature-list li", ".product-bullets li",
        multiple=True,
    ),
}

VALIDATION = {
    "title": FieldValidation(required=True, min_length=2, max_length=300),
    "price": FieldValidation(required=True, validator=is_numeric),
    "original_price": FieldValidation(validator=is_numeric),
    "description": FieldValidation(max_length=5000),
    "images": FieldValidation(max_length=20, validator=lambda urls: all(is_url(u) for u in urls)),
}

TEMPLATE = Template(
    name="ecommerce_product",
    description="Extract product information from e-commerce pages",
    signals=SIGNALS,
    schema=SCHEMA,
    validation=VALIDATION,
)
