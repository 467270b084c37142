"""Unit tests for pattern-based category detection."""

import pytest

from specsearch.config import Settings
from specsearch.domain.classification import CategoryPattern
from specsearch.services.category_detector import CategoryDetector, round_confidence
from specsearch.services.category_patterns import DEFAULT_CATEGORY, DEFAULT_PATTERNS


STRIPE_TITLE = "Stripe Payment Integration"
STRIPE_BODY = "Integrate Stripe to handle billing for every subscription, including monthly invoices and refunds."


@pytest.fixture
def detector(settings) -> CategoryDetector:
    return CategoryDetector(settings=settings)


@pytest.mark.unit
class TestDetectWithConfidence:
    def test_stripe_spec_is_payments(self, detector):
        result = detector.detect_with_confidence(STRIPE_TITLE, STRIPE_BODY)

        assert result.category == "payments"
        assert result.confidence > 0.3
        assert result.confidence == pytest.approx(0.37)
        assert {"stripe", "billing"} <= set(result.matched_keywords)

    def test_stripe_spec_alternatives(self, detector):
        result = detector.detect_with_confidence(STRIPE_TITLE, STRIPE_BODY)

        alternatives = [alternative.category for alternative in result.alternative_categories]
        assert alternatives[0] == "api"
        assert "payments" not in alternatives
        assert len(alternatives) <= 3
        for alternative in result.alternative_categories:
            assert round(alternative.confidence, 2) == alternative.confidence

    def test_empty_input_is_general(self, detector):
        result = detector.detect_with_confidence("", "")

        assert result.category == DEFAULT_CATEGORY
        assert result.confidence == 0
        assert result.matched_keywords == []
        assert result.alternative_categories == []

    def test_detect_returns_name_only(self, detector):
        assert detector.detect("Docker deployment", "Deploy containers to Kubernetes on AWS") == "infrastructure"

    def test_title_matches_weigh_more(self, detector):
        in_title = detector.analyze("Database schema", "notes")
        in_body = detector.analyze("Notes", "database schema")

        def score(analysis):
            return next(entry.score for entry in analysis.all_scores if entry.category == "database")

        assert score(in_title) > score(in_body)

    def test_alternatives_limit_comes_from_settings(self):
        detector = CategoryDetector(settings=Settings(max_alternative_categories=1))

        result = detector.detect_with_confidence(STRIPE_TITLE, STRIPE_BODY)

        assert len(result.alternative_categories) == 1

    def test_detection_never_raises_on_odd_input(self, detector):
        result = detector.detect_with_confidence("((([[[", "\\d+ ???")

        assert 0.0 <= result.confidence <= 1.0


@pytest.mark.unit
class TestRegistry:
    def test_default_registry(self, detector):
        assert detector.get_categories() == sorted(pattern.name for pattern in DEFAULT_PATTERNS)
        assert detector.get_category_info("payments").priority == 9
        assert detector.get_category_info("missing") is None

    def test_patterns_are_iterated_by_priority(self, detector):
        priorities = [pattern.priority for pattern in detector.patterns]

        assert priorities == sorted(priorities, reverse=True)
        # payments and security share priority 9; registration order is kept
        assert [pattern.name for pattern in detector.patterns[:2]] == ["payments", "security"]

    def test_add_pattern_registers_new_category(self, detector):
        detector.add_pattern(
            CategoryPattern(
                name="analytics",
                patterns=[r"dashboard|funnel|cohort"],
                keywords=["dashboard", "funnel", "cohort"],
                priority=10,
            )
        )

        result = detector.detect_with_confidence("Funnel dashboard", "Cohort retention charts")

        assert result.category == "analytics"
        assert detector.patterns[0].name == "analytics"
        assert "analytics" in detector.get_categories()

    def test_add_pattern_replaces_by_name(self, detector):
        detector.add_pattern(CategoryPattern(name="payments", patterns=[r"zzz"], keywords=["zzz"], priority=1))

        assert detector.get_category_info("payments").priority == 1
        assert detector.patterns[-1].name == "payments"
        assert len(detector.get_categories()) == len(DEFAULT_PATTERNS)
        assert detector.detect(STRIPE_TITLE, STRIPE_BODY) != "payments"

    def test_remove_pattern(self, detector):
        assert detector.remove_pattern("payments")
        assert not detector.remove_pattern("payments")
        assert "payments" not in detector.get_categories()

    def test_string_patterns_are_compiled_case_insensitive(self):
        pattern = CategoryPattern(name="demo", patterns=["Widget"], keywords=["widget"], priority=5)

        assert pattern.patterns[0].search("WIDGET")
        assert pattern.max_score == pytest.approx((1 * 5 * 2 + 1 * 2) * 0.5)

    def test_empty_registry_always_general(self):
        detector = CategoryDetector(patterns=[])

        assert detector.detect(STRIPE_TITLE, STRIPE_BODY) == DEFAULT_CATEGORY


@pytest.mark.unit
class TestAnalyze:
    def test_analyze_empty_input_suggestions(self, detector):
        analysis = detector.analyze("", "")

        assert analysis.detected_category == DEFAULT_CATEGORY
        assert analysis.suggestions == [
            "Consider adding more specific keywords to improve category detection",
            "No specific keywords found - defaulting to general category",
        ]
        assert len(analysis.all_scores) == len(DEFAULT_PATTERNS)

    def test_analyze_scores_are_sorted(self, detector):
        analysis = detector.analyze(STRIPE_TITLE, STRIPE_BODY)

        scores = [entry.score for entry in analysis.all_scores]
        assert scores == sorted(scores, reverse=True)
        assert analysis.all_scores[0].category == "payments"
        assert analysis.all_scores[0].pattern_matches == 3

    def test_analyze_suggests_strong_alternative(self):
        detector = CategoryDetector(
            patterns=[
                CategoryPattern(name="first", patterns=[r"shared"], keywords=["shared"], priority=6),
                CategoryPattern(name="second", patterns=[r"shared"], keywords=["shared"], priority=5),
            ]
        )

        analysis = detector.analyze("shared", "shared")

        assert analysis.detected_category == "first"
        assert "This could also be categorized as 'second'" in analysis.suggestions


@pytest.mark.unit
def test_round_confidence_rounds_half_up():
    assert round_confidence(0.125) == 0.13
    assert round_confidence(0.3721) == 0.37
