"""Unit tests for schema-driven field extraction."""

from __future__ import annotations

import re

import pytest

from pageshape.extractors.context import DocumentContext
from pageshape.extractors.schema import (
    FieldFilter,
    FieldSpec,
    extract_field,
    extract_with_schema,
    field,
)
from pageshape.extractors.transforms import parse_price

_HTML = """
<html><body>
  <span class="label">no digits here</span>
  <span class="amount">Total: 42 EUR</span>
  <ul>
    <li class="item">Apple</li>
    <li class="item">   </li>
    <li class="item">Banana</li>
  </ul>
  <ul><li class="flag">Nothing to see</li></ul>
  <a class="link" href="/next">Next</a>
  <span class="status">Status: Pinned by staff</span>
</body></html>
"""


@pytest.fixture
def ctx() -> DocumentContext:
    return DocumentContext(_HTML, "https://example.com/list/")


class TestSelectorOrder:
    def test_first_matching_selector_wins(self, ctx):
        assert extract_field(ctx, field(".missing", ".label", ".amount")) == "no digits here"

    def test_rejected_value_does_not_fall_through(self, ctx):
        # .label matches, its text fails the filter, and .amount is never tried
        assert extract_field(ctx, field(".label", ".amount", regex=r"(\d+)")) is None

    def test_swapping_selectors_changes_value(self, ctx):
        assert extract_field(ctx, field(".label", ".amount")) == "no digits here"
        assert extract_field(ctx, field(".amount", ".label")) == "Total: 42 EUR"

    def test_no_match_is_none(self, ctx):
        assert extract_field(ctx, field(".missing")) is None


class TestFilters:
    def test_regex_capture_group(self, ctx):
        assert extract_field(ctx, field(".amount", regex=r"(\d+)\s*eur")) == "42"

    def test_regex_without_group_uses_whole_match(self, ctx):
        assert extract_field(ctx, field(".amount", regex=r"\d+ EUR")) == "42 EUR"

    def test_filter_runs_before_transform(self, ctx):
        spec = field(".amount", regex=r"(\d+)", transform=lambda s: int(s) * 2)
        assert extract_field(ctx, spec) == 84

    def test_contains_is_case_insensitive(self, ctx):
        assert extract_field(ctx, field(".status", contains=("pinned",))) == "Status: Pinned by staff"
        assert extract_field(ctx, field(".status", contains=("locked",))) is None

    def test_filter_needs_exactly_one_rule(self):
        with pytest.raises(ValueError):
            FieldFilter()
        with pytest.raises(ValueError):
            FieldFilter(regex=re.compile("x"), contains=("x",))


class TestMultiple:
    def test_empty_items_dropped(self, ctx):
        assert extract_field(ctx, field("li.item", multiple=True)) == ["Apple", "Banana"]

    def test_all_rejected_is_none(self, ctx):
        assert extract_field(ctx, field("li.flag", multiple=True, contains=("yes",))) is None


class TestTransformsAndAttributes:
    def test_transform_applied(self, ctx):
        assert extract_field(ctx, field(".amount", transform=parse_price)) == pytest.approx(42.0)

    def test_failing_transform_yields_none(self, ctx):
        assert extract_field(ctx, field(".label", transform=int)) is None

    def test_attribute_resolved(self, ctx):
        assert extract_field(ctx, field("a.link", attribute="href")) == "https://example.com/next"

    def test_missing_attribute_is_none(self, ctx):
        assert extract_field(ctx, field("a.link", attribute="data-id")) is None


class TestExtractWithSchema:
    def test_every_field_present(self, ctx):
        schema = {"label": field(".label"), "missing": field(".nope"), "items": field("li.item", multiple=True)}
        result = extract_with_schema(ctx, schema)
        assert list(result) == ["label", "missing", "items"]
        assert result["missing"] is None

    def test_spec_needs_selectors(self):
        with pytest.raises(ValueError):
            FieldSpec(selectors=())
