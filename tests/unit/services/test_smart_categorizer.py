"""Unit tests for similarity-based categorization."""

import pytest

from specsearch.domain.document import SpecMetadata
from specsearch.services.smart_categorizer import CATEGORY_KEYWORDS, SmartCategorizer


pytestmark = pytest.mark.unit


EXISTING_SPECS = [
    {"id": 1, "title": "Stripe billing integration", "category": "payments"},
    SpecMetadata(id=2, title="OAuth login flow", category="authentication"),
    {"id": 3, "title": "Refund workflow", "category": "payments"},
]


def test_candidates_group_titles_by_category(settings):
    categorizer = SmartCategorizer(settings=settings)

    candidates = categorizer.build_candidates(EXISTING_SPECS)

    assert [candidate.id for candidate in candidates] == ["payments", "authentication"]
    assert candidates[0].text == "Stripe billing integration Refund workflow"
    assert candidates[0].keywords == CATEGORY_KEYWORDS["payments"]


def test_unknown_categories_have_no_keywords(settings):
    categorizer = SmartCategorizer(settings=settings)

    candidates = categorizer.build_candidates([{"title": "Offsite", "category": "events"}])

    assert candidates[0].keywords == ()


def test_suggest_picks_most_similar_category(settings):
    categorizer = SmartCategorizer(settings=settings)

    suggestion = categorizer.suggest("Billing dashboard", "stripe invoices", EXISTING_SPECS[:2])

    assert suggestion.category == "payments"
    assert suggestion.confidence == "high"
    assert suggestion.score == pytest.approx(0.6 * (1 / 3) ** 0.5 + 0.4 * 0.4 + 0.2)


def test_suggest_without_existing_specs(settings):
    assert SmartCategorizer(settings=settings).suggest("Anything", "at all", []) is None


def test_custom_keyword_table(settings):
    categorizer = SmartCategorizer(settings=settings, category_keywords={"events": ["venue"]})

    candidates = categorizer.build_candidates([{"title": "Venue", "category": "events"}])

    assert candidates[0].keywords == ("venue",)


def test_weak_best_match_proposes_a_new_category(settings):
    strict = SmartCategorizer(settings=settings.model_copy(update={"new_category_threshold": 0.8}))
    lenient = SmartCategorizer(settings=settings)

    args = ("Billing dashboard", "stripe invoices", EXISTING_SPECS[:2])

    assert strict.suggest(*args).create_new_category
    assert not lenient.suggest(*args).create_new_category
