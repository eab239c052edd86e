"""Unit tests for template detection scoring and ranking."""

from __future__ import annotations

import pytest

from pageshape.extractors.context import DocumentContext
from pageshape.extractors.detection import (
    DetectionSignals,
    breakdown_signals,
    detect_best_template,
    score_signals,
)
from pageshape.extractors.schema import field
from pageshape.settings import DetectionWeights, ExtractionConfig
from pageshape.templates import Template, TemplateRegistry, default_registry

_HTML = '<html><body><div class="a"></div><p>hello world</p></body></html>'
_URL = "https://example.com/foo/page"


def _template(name: str, signals: DetectionSignals) -> Template:
    return Template(name=name, description=name, signals=signals, schema={"title": field("h1")})


_FULL_MATCH = DetectionSignals(
    url_patterns=("/foo/",),
    selectors=(".a",),
    required_elements=("p",),
    keywords=("hello",),
)


class TestScoreSignals:
    def test_weighted_sum(self):
        ctx = DocumentContext(_HTML, _URL)
        signals = DetectionSignals(
            url_patterns=("/foo/", "/bar/"),
            selectors=(".a", ".b"),
            required_elements=(".a",),
            keywords=("hello", "absent"),
        )
        # 0.5*0.20 + 0.5*0.35 + 1*0.30 + 0.5*0.15
        assert score_signals(ctx, signals) == pytest.approx(0.65)

    def test_breakdown_counts(self):
        ctx = DocumentContext(_HTML, _URL)
        result = breakdown_signals(ctx, _FULL_MATCH)
        assert (result.url_hits, result.selector_hits, result.required_hits, result.keyword_hits) == (
            1, 1, 1, 1,
        )
        assert result.score == pytest.approx(1.0)

    def test_empty_groups_contribute_nothing(self):
        ctx = DocumentContext(_HTML, _URL)
        assert score_signals(ctx, DetectionSignals()) == 0.0
        assert score_signals(ctx, DetectionSignals(selectors=(".a",))) == pytest.approx(0.35)

    def test_url_patterns_are_case_insensitive(self):
        ctx = DocumentContext(_HTML, "https://example.com/FOO/Page")
        assert score_signals(ctx, DetectionSignals(url_patterns=("/foo/",))) == pytest.approx(0.2)

    def test_missing_url_scores_zero_for_url_group(self):
        ctx = DocumentContext(_HTML, "")
        assert score_signals(ctx, DetectionSignals(url_patterns=("/foo/",))) == 0.0

    def test_adding_matches_never_lowers_score(self):
        signals = DetectionSignals(
            selectors=(".a", ".b", ".c"),
            required_elements=(".price",),
            keywords=("buy now",),
        )
        before = score_signals(DocumentContext(_HTML, _URL), signals)
        richer = _HTML.replace(
            "</body>", '<div class="b"></div><span class="price">1</span>Buy now</body>',
        )
        after = score_signals(DocumentContext(richer, _URL), signals)
        assert after >= before
        assert 0.0 <= before <= after <= 1.0

    def test_custom_weights(self):
        ctx = DocumentContext(_HTML, _URL)
        weights = DetectionWeights(selectors=1.0, required=0.0, url=0.0, keywords=0.0)
        assert score_signals(ctx, DetectionSignals(selectors=(".a", ".zzz")), weights) == pytest.approx(0.5)

    def test_invalid_selector_does_not_raise(self):
        ctx = DocumentContext(_HTML, _URL)
        assert score_signals(ctx, DetectionSignals(selectors=("[[[",))) == 0.0


class TestDetectBestTemplate:
    def test_early_exit_on_high_confidence(self):
        registry = TemplateRegistry([_template("first", _FULL_MATCH), _template("second", _FULL_MATCH)])
        detection = detect_best_template(DocumentContext(_HTML, _URL), registry)
        assert detection.name == "first"
        assert detection.confidence == pytest.approx(1.0)
        assert "second" not in detection.scores

    def test_tie_goes_to_earliest_registration(self):
        # 0.35 + 0.30 = 0.65: above the low threshold, below early exit
        signals = DetectionSignals(selectors=(".a",), required_elements=("p",))
        registry = TemplateRegistry([_template("first", signals), _template("second", signals)])
        detection = detect_best_template(DocumentContext(_HTML, _URL), registry)
        assert detection.name == "first"
        assert detection.scores == {"first": pytest.approx(0.65), "second": pytest.approx(0.65)}

    def test_max_score_wins(self):
        weak = DetectionSignals(selectors=(".a",), required_elements=("p", ".zzz"))
        strong = DetectionSignals(selectors=(".a",), required_elements=("p",))
        registry = TemplateRegistry([_template("weak", weak), _template("strong", strong)])
        assert detect_best_template(DocumentContext(_HTML, _URL), registry).name == "strong"

    def test_nothing_above_low_confidence(self):
        registry = TemplateRegistry([_template("only", DetectionSignals(selectors=(".a",)))])
        detection = detect_best_template(DocumentContext(_HTML, _URL), registry)
        assert detection.template is None
        assert detection.confidence == 0.0
        assert detection.scores == {"only": pytest.approx(0.35)}

    def test_low_threshold_is_configurable(self):
        registry = TemplateRegistry([_template("only", DetectionSignals(selectors=(".a",)))])
        config = ExtractionConfig(low_confidence=0.3)
        assert detect_best_template(DocumentContext(_HTML, _URL), registry, config).name == "only"

    def test_empty_document_selects_nothing(self):
        detection = detect_best_template(DocumentContext("", ""), default_registry())
        assert detection.template is None
        assert set(detection.scores) == set(default_registry().names())
        assert all(score == 0.0 for score in detection.scores.values())


class TestConfigValidation:
    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValueError):
            DetectionWeights(selectors=0.5, required=0.5, url=0.5, keywords=0.0)

    def test_weights_must_be_non_negative(self):
        with pytest.raises(ValueError):
            DetectionWeights(selectors=1.2, required=-0.2, url=0.0, keywords=0.0)

    def test_thresholds_must_be_ordered(self):
        with pytest.raises(ValueError):
            ExtractionConfig(high_confidence=0.4, low_confidence=0.6)

    def test_max_workers_positive(self):
        with pytest.raises(ValueError):
            ExtractionConfig(max_workers=0)
