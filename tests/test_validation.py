"""Unit tests for field and record validation."""

from __future__ import annotations

import re

from pageshape.extractors.validation import (
    FieldValidation,
    has_min_words,
    is_clean,
    is_date,
    is_email,
    is_numeric,
    is_url,
    validate_field,
    validate_record,
)


class TestValidateField:
    def test_no_rule_accepts_anything(self):
        result = validate_field("whatever", None)
        assert result.valid
        assert result.cleaned == "whatever"

    def test_required_missing(self):
        result = validate_field("   ", FieldValidation(required=True))
        assert not result.valid
        assert result.cleaned is None
        assert result.error == "Required field is missing"

    def test_optional_missing_is_valid(self):
        result = validate_field(None, FieldValidation(min_length=3))
        assert result.valid
        assert result.cleaned is None

    def test_too_short_keeps_value(self):
        result = validate_field("a", FieldValidation(min_length=2))
        assert not result.valid
        assert result.cleaned == "a"
        assert "too short" in result.error

    def test_too_long_truncates(self):
        result = validate_field("abcdef", FieldValidation(max_length=3))
        assert not result.valid
        assert result.cleaned == "abc"

    def test_list_counts_items(self):
        result = validate_field(["a", "b", "c"], FieldValidation(max_length=2))
        assert not result.valid
        assert result.cleaned == ["a", "b"]
        assert "Too many items" in result.error

    def test_list_too_few_items(self):
        result = validate_field(["a"], FieldValidation(min_length=2))
        assert not result.valid
        assert result.cleaned == ["a"]

    def test_pattern(self):
        rule = FieldValidation(pattern=re.compile(r"^\d{4}$"))
        assert validate_field("2024", rule).valid
        assert not validate_field("24", rule).valid

    def test_strings_are_stripped(self):
        assert validate_field("  hello ", FieldValidation()).cleaned == "hello"

    def test_numbers_keep_their_type(self):
        result = validate_field(19.99, FieldValidation(validator=is_numeric))
        assert result.valid
        assert result.cleaned == 19.99

    def test_custom_validator_failure(self):
        result = validate_field("ftp://x", FieldValidation(validator=is_url))
        assert not result.valid
        assert result.error == "Custom validation failed"

    def test_raising_validator_counts_as_failure(self):
        def boom(_value):
            raise RuntimeError("nope")

        result = validate_field("x", FieldValidation(validator=boom))
        assert not result.valid
        assert result.cleaned == "x"


class TestValidateRecord:
    def test_collects_errors_and_keeps_fields(self):
        rules = {
            "title": FieldValidation(required=True),
            "price": FieldValidation(required=True, validator=is_numeric),
        }
        result = validate_record({"title": None, "price": 19.99, "extra": "kept"}, rules)
        assert not result.valid
        assert set(result.errors) == {"title"}
        assert result.cleaned == {"title": None, "price": 19.99, "extra": "kept"}

    def test_absent_ruled_field_added_as_none(self):
        rules = {"title": FieldValidation(required=True), "summary": FieldValidation()}
        result = validate_record({}, rules)
        assert result.cleaned == {"title": None, "summary": None}
        assert result.errors == {"title": "Required field is missing"}

    def test_all_valid(self):
        result = validate_record({"title": "Hello"}, {"title": FieldValidation(required=True)})
        assert result.valid
        assert result.errors == {}


class TestValidators:
    def test_is_url(self):
        assert is_url("https://example.com/a")
        assert not is_url("/relative/path")
        assert not is_url("mailto:a@b.com")

    def test_is_email(self):
        assert is_email("jane@example.com")
        assert not is_email("jane at example.com")

    def test_is_numeric(self):
        assert is_numeric("12.5")
        assert is_numeric(3)
        assert not is_numeric(True)
        assert not is_numeric(float("nan"))
        assert not is_numeric("twelve")

    def test_is_date(self):
        assert is_date("January 15, 2024")
        assert not is_date("someday")

    def test_has_min_words(self):
        check = has_min_words(3)
        assert check("one two three")
        assert not check("one two")

    def test_is_clean(self):
        assert is_clean("A proper title")
        assert not is_clean("undefined")
        assert not is_clean("Title&nbsp;here")
