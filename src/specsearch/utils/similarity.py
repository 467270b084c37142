"""Text similarity measures used for smart categorization and related specs.

All functions tokenize with the similarity analyzer (lower-cased word tokens
minus a small stop-word list) and never raise for string input.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
import math
from typing import Any, Literal

from specsearch.config import Settings
from specsearch.domain.similarity import MatchCandidate, RankedMatch, SimilarityResult
from specsearch.search.analyzers import SimilarityAnalyzer, tokenize


_ANALYZER = SimilarityAnalyzer()

# Settings resolved from the environment on first use when callers pass none
_settings_holder: dict[str, Settings | None] = {"settings": None}

COMMON_TERM_MIN_LENGTH = 4
MAX_COMMON_TERMS = 5


def _resolve_settings(settings: Settings | None) -> Settings:
    if settings is not None:
        return settings
    if _settings_holder["settings"] is None:
        _settings_holder["settings"] = Settings()
    return _settings_holder["settings"]  # type: ignore[return-value]


def _tokens(text: str) -> list[str]:
    return tokenize(text, _ANALYZER)


def _term_frequencies(tokens: Sequence[str]) -> dict[str, float]:
    total = len(tokens)
    if total == 0:
        return {}
    return {term: count / total for term, count in Counter(tokens).items()}


def cosine_similarity(text1: str, text2: str) -> float:
    """Cosine of the normalised term-frequency vectors of both texts."""
    tf1 = _term_frequencies(_tokens(text1))
    tf2 = _term_frequencies(_tokens(text2))

    magnitude1 = math.sqrt(sum(freq * freq for freq in tf1.values()))
    magnitude2 = math.sqrt(sum(freq * freq for freq in tf2.values()))
    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0

    dot_product = sum(freq * tf2.get(term, 0.0) for term, freq in tf1.items())
    return dot_product / (magnitude1 * magnitude2)


def jaccard_similarity(text1: str, text2: str) -> float:
    """Intersection over union of the token sets."""
    set1 = set(_tokens(text1))
    set2 = set(_tokens(text2))
    union = set1 | set2
    if not union:
        return 0.0
    return len(set1 & set2) / len(union)


def weighted_similarity(
    text1: str,
    text2: str,
    keywords: Iterable[str] = (),
    *,
    settings: Settings | None = None,
) -> SimilarityResult:
    """Blend cosine and Jaccard similarity, boosted by shared keywords.

    Each keyword found (case-insensitively, as a substring) in both texts adds
    ``keyword_boost`` to the score, which is capped at 1.0.
    """
    settings = _resolve_settings(settings)

    matched_keywords: list[str] = []
    lower1 = (text1 or "").lower()
    lower2 = (text2 or "").lower()
    for keyword in keywords:
        lowered = keyword.lower()
        if lowered in lower1 and lowered in lower2:
            matched_keywords.append(keyword)

    # dict preserves first-seen order of the target's tokens
    set2 = set(_tokens(text2))
    common_terms = [
        term for term in dict.fromkeys(_tokens(text1)) if term in set2 and len(term) >= COMMON_TERM_MIN_LENGTH
    ]

    base_score = (
        cosine_similarity(text1, text2) * settings.cosine_weight
        + jaccard_similarity(text1, text2) * settings.jaccard_weight
    )
    score = min(1.0, base_score + settings.keyword_boost * len(matched_keywords))

    matched_terms = list(dict.fromkeys([*matched_keywords, *common_terms[:MAX_COMMON_TERMS]]))
    return SimilarityResult(score=score, matched_terms=matched_terms, method="cosine")


def _as_candidate(candidate: MatchCandidate | Mapping[str, Any]) -> MatchCandidate:
    if isinstance(candidate, MatchCandidate):
        return candidate
    return MatchCandidate(
        id=str(candidate["id"]),
        text=str(candidate.get("text") or ""),
        keywords=tuple(candidate.get("keywords") or ()),
    )


def find_best_match(
    target_text: str,
    candidates: Iterable[MatchCandidate | Mapping[str, Any]],
    *,
    settings: Settings | None = None,
) -> list[RankedMatch]:
    """Rank ``candidates`` by weighted similarity to ``target_text``.

    The sort is stable, so equally similar candidates keep their input order.
    """
    settings = _resolve_settings(settings)
    scored = []
    for raw in candidates:
        candidate = _as_candidate(raw)
        similarity = weighted_similarity(target_text, candidate.text, candidate.keywords, settings=settings)
        scored.append((candidate.id, similarity))

    scored.sort(key=lambda item: -item[1].score)
    return [
        RankedMatch(id=candidate_id, similarity=similarity, rank=rank)
        for rank, (candidate_id, similarity) in enumerate(scored, start=1)
    ]


def calculate_confidence(similarity_score: float) -> Literal["high", "medium", "low"]:
    if similarity_score >= 0.7:
        return "high"
    if similarity_score >= 0.4:
        return "medium"
    return "low"


def should_create_new_category(top_score: float, threshold: float = 0.3) -> bool:
    """True when even the best match is too weak to reuse an existing category."""
    return top_score < threshold
