"""Tests for publish paths and the publishable record view."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pageshape.items import ExtractedRecord
from pageshape.publish import publish_path


class TestPublishPath:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://example.com/blog/my-post/", "example.com/blog_my-post.md"),
            ("https://example.com/", "example.com/index.md"),
            ("https://example.com", "example.com/index.md"),
            ("https://shop.example.com/p/a.b?c=1", "shop.example.com/p_a_b.md"),
            ("", "unknown-host/index.md"),
        ],
    )
    def test_paths(self, url, expected):
        assert publish_path(url) == expected

    def test_base_path(self):
        assert publish_path("https://example.com/a", "/site/pages/") == "site/pages/example.com/a.md"


class TestExtractedRecord:
    def test_to_publishable(self):
        record = ExtractedRecord(
            url="https://example.com/blog/post",
            template="article",
            stage="template",
            content_markdown="# Post\n",
        )
        assert record.to_publishable("out") == {
            "path": "out/example.com/blog_post.md",
            "markdown": "# Post\n",
        }

    def test_confidence_clamped(self):
        assert ExtractedRecord(template="x", stage="template", confidence=1.7).confidence == 1.0
        assert ExtractedRecord(template="x", stage="template", confidence=-0.2).confidence == 0.0

    def test_strings_stripped(self):
        record = ExtractedRecord(url="  https://e.com/ ", title=" T ", template="x", stage="generic")
        assert record.url == "https://e.com/"
        assert record.title == "T"

    def test_frozen(self):
        record = ExtractedRecord(template="x", stage="generic")
        with pytest.raises(ValidationError):
            record.title = "changed"

    def test_unknown_stage_rejected(self):
        with pytest.raises(ValidationError):
            ExtractedRecord(template="x", stage="somewhere")
