"""End-to-end tests for extract(), extract_batch() and the fallback chain."""

from __future__ import annotations

import logging

import pytest

from pageshape import ExtractedRecord, extract, extract_batch
from pageshape.settings import ExtractionConfig
from pageshape.templates import default_registry

PRODUCT_URL = "https://shop.example.com/product/blue-widget"
ARTICLE_URL = "https://example.com/blog/how-we-test-parsers"
READABLE_URL = "https://example.com/essays/gardens"


class TestProductPage:
    def test_detected_with_fields(self, product_html):
        record = extract(product_html, PRODUCT_URL)
        assert record.template == "ecommerce_product"
        assert record.stage == "template"
        assert record.method == "template"
        assert record.confidence == pytest.approx(0.35 + 0.30 + 0.15 + 0.20 / 7)
        assert record.title == "Blue Widget"
        assert record.fields["price"] == pytest.approx(19.99)
        assert record.fields["rating"] == pytest.approx(4.5)
        assert record.is_valid
        assert record.errors == {}

    def test_markdown_layout(self, product_html):
        md = extract(product_html, PRODUCT_URL).content_markdown
        assert md.startswith("# Blue Widget\n")
        assert "**Price:** $19.99" in md
        assert "**Was:** $24.99" in md
        assert "**Rating:** 4.5/5 (1200 reviews)" in md
        assert "## Features" in md
        assert md.endswith("\n")

    def test_scores_cover_registry(self, product_html):
        record = extract(product_html, PRODUCT_URL)
        assert set(record.scores) == set(default_registry().names())
        assert max(record.scores, key=record.scores.get) == "ecommerce_product"

    def test_missing_required_field_flagged_not_dropped(self, product_html):
        html = product_html.replace('<h1 itemprop="name">Blue Widget</h1>', "")
        record = extract(html, PRODUCT_URL)
        assert record.template == "ecommerce_product"
        assert not record.is_valid
        assert "title" in record.errors
        assert record.fields["title"] is None
        assert record.fields["price"] == pytest.approx(19.99)
        # title falls back to the document <title>
        assert record.title == "Blue Widget | Acme Shop"

    def test_content_text_lists_fields(self, product_html):
        record = extract(product_html, PRODUCT_URL)
        assert "Price: 19.99" in record.content_text
        assert "Sku: BW-001" in record.content_text


class TestArticlePage:
    def test_detected_with_fields(self, article_html):
        record = extract(article_html, ARTICLE_URL)
        assert record.template == "article"
        assert record.stage == "template"
        assert 0.5 < record.confidence <= 0.85
        assert record.title == "How We Test Parsers"
        assert record.fields["author"] == "Jane Smith"
        assert record.fields["publish_date"].startswith("2024-01-15")
        assert record.fields["tags"] == ["testing", "python"]

    def test_content_comes_from_readability(self, article_html):
        record = extract(article_html, ARTICLE_URL)
        assert record.method in ("readability", "trafilatura")
        assert "corpus of saved pages" in record.fields["content"]
        assert "corpus of saved pages" in record.content_text

    def test_markdown_layout(self, article_html):
        md = extract(article_html, ARTICLE_URL).content_markdown
        assert md.startswith("# How We Test Parsers\n")
        assert "*By Jane Smith*" in md
        assert "*6 min read*" in md
        assert "**Tags:** testing, python" in md


class TestFallbackChain:
    def test_readability_when_no_template_matches(self, readable_html):
        record = extract(readable_html, READABLE_URL)
        assert record.template == "readability"
        assert record.stage == "readability"
        assert record.confidence == 0.0
        assert record.method in ("readability", "trafilatura")
        assert "small garden" in record.content_text
        assert record.content_markdown.endswith("\n")
        assert "title" not in record.fields
        assert record.fields["language"] == "en"

    def test_empty_html_reaches_generic(self):
        record = extract("", "")
        assert record.template == "generic"
        assert record.stage == "generic"
        assert record.confidence == 0.0
        assert record.title == "Untitled"
        assert record.content_markdown == "# Untitled\n"

    def test_generic_heuristic_sections(self):
        html = (
            "<html><head><title>Tiny</title></head><body>"
            "<nav>Menu</nav>"
            "<main><h2>First</h2><p>Alpha.</p><h2>Second</h2><p>Beta.</p></main>"
            "<footer>Footer</footer>"
            "</body></html>"
        )
        record = extract(html, "https://example.org/tiny")
        assert record.template == "generic"
        assert record.method == "dom_heuristic"
        assert record.content_markdown.startswith("# Tiny\n\n## First\n\nAlpha.")
        assert "## Second" in record.content_markdown
        assert "Menu" not in record.content_markdown
        assert "Footer" not in record.content_markdown

    def test_malformed_html_never_raises(self):
        record = extract("<div><p>unclosed <b>bold <table><tr><td>cell", "https://example.org/x")
        assert isinstance(record, ExtractedRecord)
        assert record.content_markdown.endswith("\n")

    def test_failing_stage_is_logged_and_skipped(self, product_html, monkeypatch, caplog):
        from pageshape.extractors import fallback

        def explode(*_args, **_kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(fallback, "extract_with_schema", explode)
        with caplog.at_level(logging.WARNING, logger="pageshape.extractors.fallback"):
            record = extract(product_html, PRODUCT_URL)
        assert record.stage in ("readability", "generic")
        assert "Stage template failed" in caplog.text

    def test_non_str_html_raises(self):
        with pytest.raises(TypeError):
            extract(b"<html></html>", "")  # type: ignore[arg-type]


class TestExplicitTemplate:
    def test_forced_template_reports_its_score(self, article_html):
        record = extract(article_html, ARTICLE_URL, template="recipe")
        assert record.template == "recipe"
        assert record.stage == "template"
        assert record.confidence < 0.5
        assert record.scores == {"recipe": pytest.approx(record.confidence)}
        assert not record.is_valid

    def test_unknown_template_falls_back_to_detection(self, product_html, caplog):
        with caplog.at_level(logging.WARNING, logger="pageshape.extractors.fallback"):
            record = extract(product_html, PRODUCT_URL, template="does_not_exist")
        assert record.template == "ecommerce_product"
        assert "does_not_exist" in caplog.text

    def test_thresholds_from_config(self, readable_html):
        config = ExtractionConfig(low_confidence=0.0)
        record = extract(readable_html, READABLE_URL, config=config)
        assert record.stage == "template"


class TestDeterminism:
    @pytest.mark.parametrize("fixture_name", ["product_html", "article_html", "readable_html"])
    def test_same_input_same_output(self, fixture_name, request):
        html = request.getfixturevalue(fixture_name)
        first = extract(html, "https://example.com/blog/page")
        second = extract(html, "https://example.com/blog/page")
        assert first.template == second.template
        assert first.confidence == second.confidence
        assert first.fields == second.fields
        assert first.content_markdown == second.content_markdown


class TestExtractBatch:
    def test_preserves_input_order(self, product_html, article_html, readable_html):
        pages = [
            (readable_html, READABLE_URL),
            (product_html, PRODUCT_URL),
            (article_html, ARTICLE_URL),
            ("", ""),
        ]
        records = extract_batch(pages, max_workers=4)
        assert [r.template for r in records] == ["readability", "ecommerce_product", "article", "generic"]
        assert [r.url for r in records] == [READABLE_URL, PRODUCT_URL, ARTICLE_URL, ""]

    def test_empty_input(self):
        assert extract_batch([]) == []

    def test_invalid_worker_count(self, product_html):
        with pytest.raises(ValueError):
            extract_batch([(product_html, PRODUCT_URL)], max_workers=0)

    def test_forced_template_applies_to_every_page(self, product_html, article_html):
        records = extract_batch(
            [(product_html, PRODUCT_URL), (article_html, ARTICLE_URL)],
            template="ecommerce_product",
            max_workers=2,
        )
        assert {r.template for r in records} == {"ecommerce_product"}


class TestThresholdSensitivity:
    """The thresholds are tuning values; these tests pin how the fixtures sit against them."""

    def test_product_fixture_is_below_early_exit(self, product_html):
        record = extract(product_html, PRODUCT_URL)
        assert 0.5 < record.confidence <= 0.85

    def test_raising_acceptance_threshold_changes_outcome(self, product_html):
        strict = ExtractionConfig(low_confidence=0.84, high_confidence=0.9)
        assert extract(product_html, PRODUCT_URL, config=strict).template != "ecommerce_product"

    def test_lowering_early_exit_keeps_winner(self, product_html):
        eager = ExtractionConfig(low_confidence=0.5, high_confidence=0.6)
        record = extract(product_html, PRODUCT_URL, config=eager)
        assert record.template == "ecommerce_product"
        assert list(record.scores) == ["ecommerce_product"]

    def test_minimal_product_page_scores_below_acceptance(self):
        html = '<div class="product-info"><span itemprop="price">$19.99</span></div>'
        record = extract(html, PRODUCT_URL)
        assert record.scores["ecommerce_product"] == pytest.approx(0.35 / 6 + 0.30 / 6 + 0.20 / 7)
        assert record.template in ("readability", "generic")
        assert record.confidence == 0.0

    def test_minimal_product_page_accepted_with_lower_threshold(self):
        html = '<div class="product-info"><span itemprop="price">$19.99</span></div>'
        lenient = ExtractionConfig(low_confidence=0.1)
        record = extract(html, PRODUCT_URL, config=lenient)
        assert record.template == "ecommerce_product"
        assert record.fields["price"] == pytest.approx(19.99)

    def test_minimal_article_page_scores_below_acceptance(self):
        html = (
            '<article><span class="byline">Jane Smith</span>'
            '<time datetime="2024-01-15">Jan 15</time>'
            '<div class="post-content">A short note on parsers.</div></article>'
        )
        record = extract(html, ARTICLE_URL)
        assert record.scores["article"] == pytest.approx(0.35 * 2 / 7 + 0.30 * 2 / 7 + 0.20 / 6)
        assert record.template != "article"
