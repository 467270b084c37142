"""Statistical helpers for TF-IDF relevance scoring.

The functions here stay independent of the index data structures so they can
be unit tested in isolation and reused by other rankers.
"""

from __future__ import annotations

from collections.abc import Iterable
import math


def log_tf(raw_count: int) -> float:
    """Return the dampened term frequency ``1 + ln(raw_count)``.

    Repeated terms grow the weight logarithmically so long documents do not
    dominate. A count of zero contributes nothing.
    """

    if raw_count <= 0:
        return 0.0
    return 1.0 + math.log(raw_count)


def calculate_idf(doc_freq: int, total_docs: int) -> float:
    """Return the add-one smoothed inverse document frequency.

    ``ln((N + 1) / (df + 1))`` never divides by zero and yields exactly zero
    for a term present in every document.
    """

    if total_docs <= 0:
        return 0.0
    df = max(0, min(doc_freq, total_docs))
    return math.log((total_docs + 1) / (df + 1))


def any_term_in(terms: Iterable[str], field_text: str) -> bool:
    """True when any term is a substring of the lower-cased field text."""

    haystack = (field_text or "").lower()
    if not haystack:
        return False
    return any(term in haystack for term in terms)


def apply_field_boosts(
    score: float,
    query_terms: Iterable[str],
    *,
    title: str,
    category: str,
    title_boost: float = 2.0,
    category_boost: float = 1.5,
) -> float:
    """Multiply ``score`` by the title and category boosts that apply.

    Each boost is applied at most once, independently of the other.
    """

    terms = tuple(query_terms)
    if any_term_in(terms, title):
        score *= title_boost
    if any_term_in(terms, category):
        score *= category_boost
    return score
