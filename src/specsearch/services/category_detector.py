"""Pattern and keyword based category detection for specs.

Pure, stateless with respect to the index: a detector only needs a title and
a body. Scoring per category:

- +3 for every regular expression matching the combined text, +2 more when
  the same expression also matches the title alone.
- +1 for every keyword present as a token, +1 more when the keyword appears
  in the title.
- ``(pattern_score * 2 + keyword_score) * priority / 10``.

Confidence is the score divided by the best score the category could reach.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
import logging
import math

from specsearch.config import Settings
from specsearch.domain.classification import (
    AlternativeCategory,
    CategoryAnalysis,
    CategoryDetectionResult,
    CategoryPattern,
    CategoryScore,
)
from specsearch.observability.metrics import CATEGORY_DETECTIONS
from specsearch.observability.tracing import create_span
from specsearch.search.analyzers import ClassifierAnalyzer
from specsearch.services.category_patterns import DEFAULT_CATEGORY, DEFAULT_PATTERNS


logger = logging.getLogger(__name__)


@dataclass
class _PatternScore:
    pattern: CategoryPattern
    score: float = 0.0
    matched_keywords: list[str] = field(default_factory=list)
    pattern_matches: int = 0

    @property
    def confidence(self) -> float:
        max_score = self.pattern.max_score
        if max_score <= 0:
            return 0.0
        return round_confidence(min(1.0, self.score / max_score))


def round_confidence(value: float) -> float:
    """Round half up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


class CategoryDetector:
    """Open registry of category patterns with confidence-scored detection."""

    def __init__(
        self,
        patterns: Iterable[CategoryPattern] | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._analyzer = ClassifierAnalyzer()
        self._patterns: dict[str, CategoryPattern] = {}
        for pattern in DEFAULT_PATTERNS if patterns is None else patterns:
            self._patterns.pop(pattern.name, None)
            self._patterns[pattern.name] = pattern
        self._sort_by_priority()

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------
    def add_pattern(self, pattern: CategoryPattern) -> None:
        """Register ``pattern``, replacing any existing pattern of the same name."""
        self._patterns.pop(pattern.name, None)
        self._patterns[pattern.name] = pattern
        self._sort_by_priority()
        logger.debug("Registered category pattern %s (priority %d)", pattern.name, pattern.priority)

    def remove_pattern(self, name: str) -> bool:
        return self._patterns.pop(name, None) is not None

    def get_categories(self) -> list[str]:
        return sorted(self._patterns)

    def get_category_info(self, name: str) -> CategoryPattern | None:
        return self._patterns.get(name)

    @property
    def patterns(self) -> tuple[CategoryPattern, ...]:
        """Registered patterns in scoring order (priority descending)."""
        return tuple(self._patterns.values())

    def _sort_by_priority(self) -> None:
        # sorted() is stable: equal priorities keep registration order
        ordered = sorted(self._patterns.values(), key=lambda pattern: -pattern.priority)
        self._patterns = {pattern.name: pattern for pattern in ordered}

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------
    def detect(self, title: str, body: str) -> str:
        return self.detect_with_confidence(title, body).category

    def detect_with_confidence(self, title: str, body: str) -> CategoryDetectionResult:
        """Pick the best category for a spec, with confidence and alternatives."""
        with create_span("classifier.detect") as span:
            result = self._detect(title, body)
            span.set_attribute("specsearch.category", result.category)
            span.set_attribute("specsearch.confidence", result.confidence)
        CATEGORY_DETECTIONS.labels(category=result.category).inc()
        return result

    def _detect(self, title: str, body: str) -> CategoryDetectionResult:
        ranked = [entry for entry in self._score_all(title, body) if entry.score > 0]
        ranked.sort(key=lambda entry: -entry.score)

        if not ranked:
            return CategoryDetectionResult(category=DEFAULT_CATEGORY, confidence=0.0)

        best = ranked[0]
        limit = self.settings.max_alternative_categories
        alternatives = [
            AlternativeCategory(category=entry.pattern.name, confidence=entry.confidence)
            for entry in ranked[1 : 1 + limit]
        ]

        logger.debug(
            "Detected category %s (score %.2f, confidence %.2f)",
            best.pattern.name,
            best.score,
            best.confidence,
        )
        return CategoryDetectionResult(
            category=best.pattern.name,
            confidence=best.confidence,
            matched_keywords=list(best.matched_keywords),
            alternative_categories=alternatives,
        )

    def analyze(self, title: str, body: str) -> CategoryAnalysis:
        """Return the detection plus every category's score and improvement hints."""
        result = self.detect_with_confidence(title, body)

        all_scores = [
            CategoryScore(
                category=entry.pattern.name,
                score=entry.score,
                confidence=entry.confidence,
                matched_keywords=list(entry.matched_keywords),
                pattern_matches=entry.pattern_matches,
            )
            for entry in self._score_all(title, body)
        ]
        all_scores.sort(key=lambda entry: -entry.score)

        suggestions: list[str] = []
        if result.confidence < self.settings.classifier_suggestion_threshold:
            suggestions.append("Consider adding more specific keywords to improve category detection")
        alternatives = result.alternative_categories
        if alternatives and alternatives[0].confidence > self.settings.alternative_suggestion_threshold:
            suggestions.append(f"This could also be categorized as '{alternatives[0].category}'")
        if not result.matched_keywords:
            suggestions.append("No specific keywords found - defaulting to general category")

        return CategoryAnalysis(
            detected_category=result.category,
            confidence=result.confidence,
            all_scores=all_scores,
            suggestions=suggestions,
        )

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------
    def _score_all(self, title: str, body: str) -> list[_PatternScore]:
        title_lower = (title or "").lower()
        text = f"{title or ''} {body or ''}".lower()
        words = {token.text for token in self._analyzer(text)}
        return [self._score_pattern(pattern, text, title_lower, words) for pattern in self._patterns.values()]

    def _score_pattern(
        self,
        pattern: CategoryPattern,
        text: str,
        title_lower: str,
        words: set[str],
    ) -> _PatternScore:
        entry = _PatternScore(pattern=pattern)

        pattern_score = 0
        for regex in pattern.patterns:
            if regex.search(text):
                pattern_score += 3
                entry.pattern_matches += 1
                if regex.search(title_lower):
                    pattern_score += 2

        keyword_score = 0
        for keyword in pattern.keywords:
            lowered = keyword.lower()
            if lowered in words:
                keyword_score += 1
                entry.matched_keywords.append(keyword)
                if lowered in title_lower:
                    keyword_score += 1

        raw_score = pattern_score * 2 + keyword_score
        entry.score = raw_score * (pattern.priority / 10)
        return entry
