"""Recipe pages."""

from __future__ import annotations

from pageshape.extractors.detection import DetectionSignals
from pageshape.extractors.schema import field
from pageshape.extractors.transforms import parse_count, parse_decimal, parse_minutes
from pageshape.extractors.validation import FieldValidation
from pageshape.templates.base import Template

SIGNALS = DetectionSignals(
    url_patterns=("/recipe/", "/recipes/", "/cooking/", "/baking/", "/meal/", "/dish/"),
    selectors=(
        '[itemtype*="Recipe"]',
        '[itemtype*="schema.org/Recipe"]',
        ".recipe-content",
        ".recipe-card",
        ".recipe-wrapper",
        "div[data-recipe]",
    ),
    required_elements=(
        ".ingredients",
        '[itemprop="recipeIngredient"]',
        ".recipe-ingredients",
        ".ingredient-list",
        ".instructions",
        '[itemprop="recipeInstructions"]',
    ),
    keywords=(
        "ingredients",
        "instructions",
        "prep time",
        "cook time",
        "servings",
        "calories",
        "recipe",
        "directions",
    ),
)

SCHEMA = {
    "title": field(
        'h1[itemprop="name"]',
        ".recipe-title",
        "h1.recipe-name",
        ".recipe-header h1",
        "[data-recipe-name]",
    ),
    "author": field(
        '[itemprop="author"]', ".recipe-author", ".recipe-by", ".chef-name", ".created-by",
    ),
    "description": field(
        '[itemprop="description"]', ".recipe-description", ".recipe-summary", ".recipe-intro",
    ),
    "prep_time": field(
        '[itemprop="prepTime"]', ".prep-time", ".preparation-time", ".recipe-prep-time",
        transform=parse_minutes,
    ),
    "cook_time": field(
        '[itemprop="cookTime"]', ".cook-time", ".cooking-time", ".recipe-cook-time",
        transform=parse_minutes,
    ),
    "total_time": field(
        '[itemprop="totalTime"]', ".total-time", ".recipe-total-time", ".duration",
        transform=parse_minutes,
    ),
    "servings": field(
        '[itemprop="recipeYield"]', ".servings", ".recipe-yield", ".serves", ".portions",
        transform=parse_count,
    ),
    "ingredients": field(
        '[itemprop="recipeIngredient"]',
        ".ingredient",
        ".recipe-ingredient",
        ".ingredients li",
        ".ingredient-list li",
        multiple=True,
    ),
    "instructions": field(
        '[itemprop="recipeInstructions"]',
        ".instruction",
        ".recipe-instruction",
        ".directions li",
        ".instructions ol li",
        ".method-step",
        multiple=True,
    ),
    "nutrition": field(
        '[itemprop="nutrition"]', ".nutrition-info", ".recipe-nutrition", ".nutritional-info",
    ),
    "calories": field(
        '[itemprop="calories"]', ".calories", ".calorie-count", ".recipe-calories",
        transform=parse_count,
    ),
    "image": field(
        '[itemprop="image"]', ".recipe-image img", ".recipe-photo img", ".recipe-hero img",
        attribute="src",
    ),
    "rating": field(
        '[itemprop="ratingValue"]', ".recipe-rating", ".star-rating", "[data-rating]",
        transform=parse_decimal,
    ),
    "review_count": field(
        '[itemprop="reviewCount"]', ".review-count", ".rating-count", ".reviews-count",
        transform=parse_count,
    ),
    "cuisine": field(
        '[itemprop="recipeCuisine"]', ".cuisine-type", ".recipe-cuisine", ".food-type",
    ),
    "category": field(
        '[itemprop="recipeCategory"]', ".recipe-category", ".meal-type", ".dish-type",
    ),
    "tags": field(
        ".recipe-tag", ".recipe-tags a", ".tag-list a", '[rel="tag"]',
        multiple=True,
    ),
}

VALIDATION = {
    "title": FieldValidation(required=True, min_length=2, max_length=300),
    "ingredients": FieldValidation(required=True, max_length=100),
    "instructions": FieldValidation(required=True, max_length=100),
}

TEMPLATE = Template(
    name="recipe",
    description="Extract recipe information including ingredients and instructions",
    signals=SIGNALS,
    schema=SCHEMA,
    validation=VALIDATION,
)
