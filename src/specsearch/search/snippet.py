"""Snippet extraction for search results.

A snippet is a short window of words around the earliest match in a
document's searchable text, with every matched term emphasised in markdown
bold so the dashboard and CLI can render it directly.
"""

from __future__ import annotations

from collections.abc import Sequence
import re


WORD_PATTERN = re.compile(r"\S+")
ELLIPSIS = "..."


def find_first_match(text: str, terms: Sequence[str]) -> int:
    """Return the earliest character offset of any term, or -1."""
    text_lower = text.lower()
    best_match_pos = -1
    for term in terms:
        if not term:
            continue
        pos = text_lower.find(term.lower())
        if pos != -1 and (best_match_pos == -1 or pos < best_match_pos):
            best_match_pos = pos
    return best_match_pos


def highlight_terms(snippet: str, terms: Sequence[str], marker: str = "**") -> str:
    """Wrap every case-insensitive whole-word occurrence of each term in ``marker``.

    Longer terms are highlighted first so a term that is a prefix of another
    does not split it.
    """
    if not snippet or not terms:
        return snippet

    unique_terms = sorted({term.lower() for term in terms if term}, key=len, reverse=True)
    if not unique_terms:
        return snippet

    alternation = "|".join(re.escape(term) for term in unique_terms)
    pattern = re.compile(rf"\b({alternation})\b", re.IGNORECASE)
    return pattern.sub(lambda match: f"{marker}{match.group(1).lower()}{marker}", snippet)


def build_snippet(
    text: str,
    terms: Sequence[str],
    *,
    context_words: int = 10,
    max_chars: int = 200,
) -> str:
    """Build a highlighted excerpt around the first matched term.

    Args:
        text: Full searchable text of the document.
        terms: Query terms that matched the document.
        context_words: Words kept before the word containing the match; the
            window holds at most ``2 * context_words`` words.
        max_chars: Length of the fallback excerpt when no term is found.

    Returns:
        The excerpt, with ``...`` where it was cut and ``**term**`` highlights.
    """
    if not text:
        return ""

    position = find_first_match(text, terms)
    if position == -1:
        return text[:max_chars] + ELLIPSIS

    words = list(WORD_PATTERN.finditer(text))
    word_index = 0
    for index, word in enumerate(words):
        if word.end() > position:
            word_index = index
            break

    start = max(0, word_index - context_words)
    end = min(len(words), word_index + context_words)
    snippet = " ".join(word.group(0) for word in words[start:end])

    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(words):
        snippet = snippet + ELLIPSIS

    return highlight_terms(snippet, terms)
