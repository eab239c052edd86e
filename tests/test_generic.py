"""Tests for the DOM heuristic used when no template or reader applies."""

from __future__ import annotations

from pageshape.extractors.context import DocumentContext
from pageshape.extractors.generic import UNTITLED, generic_extract, title_only


def _extract(body: str, title: str = "Doc"):
    html = f"<html><head><title>{title}</title></head><body>{body}</body></html>"
    return generic_extract(DocumentContext(html, "https://example.com/page"))


class TestGenericExtract:
    def test_starts_with_title_heading(self):
        result = _extract("<main><p>Just text.</p></main>")
        assert result.title == "Doc"
        assert result.markdown.startswith("# Doc\n\n")
        assert "Just text." in result.markdown

    def test_nested_section_emitted_once(self):
        result = _extract(
            "<main><h1>Top</h1><section><h2>Sub</h2>"
            "<p>UniqueSentence here.</p></section></main>"
        )
        assert result.markdown.count("UniqueSentence here.") == 1
        assert result.markdown.count("## Sub") == 1
        assert result.markdown.index("# Top") < result.markdown.index("## Sub")

    def test_lead_paragraph_before_first_heading_kept(self):
        result = _extract(
            "<main><p>LeadParagraph before any heading.</p><h2>Sub</h2><p>x</p></main>"
        )
        md = result.markdown
        assert "LeadParagraph before any heading." in md
        assert md.index("LeadParagraph") < md.index("## Sub")
        assert "LeadParagraph" in result.text

    def test_content_after_nested_heading_stays_in_order(self):
        result = _extract(
            "<main><div><h2>First</h2><p>alpha</p></div>"
            "<p>between</p><div><h2>Second</h2><p>beta</p></div></main>"
        )
        md = result.markdown
        positions = [md.index(s) for s in ("## First", "alpha", "between", "## Second", "beta")]
        assert positions == sorted(positions)

    def test_chrome_is_stripped(self):
        result = _extract("<nav>Menu links</nav><main><h2>Body</h2><p>kept</p></main>")
        assert "Menu links" not in result.markdown
        assert "kept" in result.markdown

    def test_empty_document(self):
        result = generic_extract(DocumentContext("", ""))
        assert result.title == UNTITLED
        assert result.markdown == f"# {UNTITLED}\n"


class TestTitleOnly:
    def test_title_only_has_no_body(self):
        result = title_only(DocumentContext("<title>Only</title>", ""))
        assert result.markdown == "# Only\n"
        assert result.text == ""
