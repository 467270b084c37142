"""Similarity-based categorization against specs that already exist.

Existing spec titles are grouped per category; each group becomes one
candidate whose keywords come from ``CATEGORY_KEYWORDS``. The new spec is
assigned the category of the most similar group.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
from typing import Any

from specsearch.config import Settings
from specsearch.domain.classification import CategorySuggestion
from specsearch.domain.document import SpecMetadata
from specsearch.domain.similarity import MatchCandidate
from specsearch.services.category_patterns import DEFAULT_CATEGORY
from specsearch.utils.similarity import calculate_confidence, find_best_match, should_create_new_category


logger = logging.getLogger(__name__)


CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "authentication": ("auth", "login", "oauth", "sso", "jwt", "token", "password", "session"),
    "payments": ("payment", "billing", "stripe", "paypal", "transaction", "invoice", "subscription"),
    "ui-components": ("component", "widget", "button", "form", "modal", "layout", "design", "theme"),
    "database": ("database", "schema", "migration", "query", "sql", "orm", "model", "table"),
    "api": ("api", "endpoint", "rest", "graphql", "webhook", "request", "response", "http"),
    "testing": ("test", "testing", "unit", "integration", "e2e", "mock", "assertion", "coverage"),
    "deployment": ("deploy", "ci", "cd", "docker", "kubernetes", "aws", "cloud", "infrastructure"),
    "monitoring": ("monitor", "logging", "metrics", "alert", "observability", "tracing", "analytics"),
    "security": ("security", "vulnerability", "encryption", "firewall", "compliance", "audit", "permission"),
    "performance": ("performance", "optimization", "cache", "speed", "latency", "throughput", "scaling"),
}


class SmartCategorizer:
    """Suggest a category by comparing a new spec with existing ones."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        category_keywords: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self.settings = settings or Settings()
        keywords = CATEGORY_KEYWORDS if category_keywords is None else category_keywords
        self.category_keywords = {name: tuple(words) for name, words in keywords.items()}

    def build_candidates(self, existing: Iterable[SpecMetadata | Mapping[str, Any]]) -> list[MatchCandidate]:
        """One candidate per category, in first-seen order."""
        titles_by_category: dict[str, list[str]] = {}
        for spec in existing:
            if isinstance(spec, SpecMetadata):
                category, title = spec.category, spec.title
            else:
                category = str(spec.get("category") or DEFAULT_CATEGORY)
                title = str(spec.get("title") or "")
            titles_by_category.setdefault(category, []).append(title)

        return [
            MatchCandidate(
                id=category,
                text=" ".join(titles),
                keywords=self.category_keywords.get(category, ()),
            )
            for category, titles in titles_by_category.items()
        ]

    def suggest(
        self,
        title: str,
        body: str,
        existing: Iterable[SpecMetadata | Mapping[str, Any]],
    ) -> CategorySuggestion | None:
        """Return the best matching existing category, or None without existing specs.

        ``create_new_category`` is set when even the best match scores below
        ``new_category_threshold``.
        """
        candidates = self.build_candidates(existing)
        if not candidates:
            return None

        matches = find_best_match(f"{title} {body}", candidates, settings=self.settings)
        top = matches[0]
        score = top.similarity.score
        confidence = calculate_confidence(score)
        logger.debug("Similarity suggests category %s (score %.3f, %s confidence)", top.id, score, confidence)
        return CategorySuggestion(
            category=top.id,
            confidence=confidence,
            score=score,
            create_new_category=should_create_new_category(score, self.settings.new_category_threshold),
        )
