"""Token analysis for spec indexing, classification and similarity.

An analyzer is a tokenizer followed by a chain of token filters. Three named
analyzers cover every consumer in the package:

- ``index``: postings and queries. Keeps tokens of 3-49 characters and drops
  common English function words.
- ``classifier``: category keyword matching. Keeps anything longer than a
  single character and applies no stop-word list.
- ``similarity``: cosine/Jaccard helpers. Keeps every non-empty token and
  drops a broader stop-word list.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, replace
import re
from typing import Protocol


@dataclass(frozen=True, slots=True)
class Token:
    """A term plus where it came from in the source text."""

    text: str
    position: int
    start_char: int
    end_char: int


class TokenFilter(Protocol):
    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]: ...


# Tokenizers turn raw text into a token stream; analyzers return the final list
Tokenizer = Callable[[str], Iterable[Token]]
Analyzer = Callable[[str], list[Token]]


INDEX_STOPWORDS = frozenset(
    """
    the and or but in on at to for of with by from as is was are were been be
    have has had do does did will would could should may might must can this
    that these those then than not more less most least into onto
    """.split()
)

SIMILARITY_STOPWORDS = frozenset(
    """
    a an and are as at be been by for from has he in is it its of on that the
    to was will with this these those there their they them then than can
    could should would may might must shall have had do does did done make
    made get got go went
    """.split()
)


class RegexTokenizer:
    """Emits every run of word characters; everything else separates terms."""

    def __init__(self, pattern: str = r"\w+") -> None:
        self._regex = re.compile(pattern, re.UNICODE)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self._regex.finditer(text)):
            yield Token(match.group(), position, match.start(), match.end())


class LowercaseFilter:
    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        return (replace(token, text=token.text.lower()) for token in tokens)


class LengthFilter:
    """Keeps tokens whose length lies within ``[min_length, max_length]``."""

    def __init__(self, min_length: int = 1, max_length: int | None = None) -> None:
        self.min_length = min_length
        self.max_length = max_length

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        upper = self.max_length if self.max_length is not None else float("inf")
        return (token for token in tokens if self.min_length <= len(token.text) <= upper)


class StopFilter:
    def __init__(self, stopwords: Iterable[str]) -> None:
        self.stopwords = frozenset(word.lower() for word in stopwords)

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        return (token for token in tokens if token.text not in self.stopwords)


class AnalyzerPipeline:
    """Runs ``tokenizer`` then each filter in order.

    Positions in the returned list are consecutive from zero, i.e. they count
    surviving tokens rather than tokens seen by the tokenizer.
    """

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] = ()) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters)

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        return [replace(token, position=position) for position, token in enumerate(stream)]


class IndexAnalyzer(AnalyzerPipeline):
    def __init__(
        self,
        *,
        min_length: int = 3,
        max_length: int = 49,
        stopwords: Iterable[str] | None = None,
    ) -> None:
        super().__init__(
            RegexTokenizer(),
            [
                LowercaseFilter(),
                LengthFilter(min_length, max_length),
                StopFilter(INDEX_STOPWORDS if stopwords is None else stopwords),
            ],
        )


class ClassifierAnalyzer(AnalyzerPipeline):
    def __init__(self) -> None:
        super().__init__(RegexTokenizer(), [LowercaseFilter(), LengthFilter(2)])


class SimilarityAnalyzer(AnalyzerPipeline):
    def __init__(self, *, stopwords: Iterable[str] | None = None) -> None:
        super().__init__(
            RegexTokenizer(),
            [LowercaseFilter(), StopFilter(SIMILARITY_STOPWORDS if stopwords is None else stopwords)],
        )


_NAMED_ANALYZERS: dict[str, Callable[[], Analyzer]] = {
    "index": IndexAnalyzer,
    "classifier": ClassifierAnalyzer,
    "similarity": SimilarityAnalyzer,
}


def get_analyzer(name: str | None = None) -> Analyzer:
    """Build the named analyzer; ``None`` means the index analyzer."""
    key = "index" if name is None else name.lower()
    try:
        factory = _NAMED_ANALYZERS[key]
    except KeyError:
        raise ValueError(f"Unknown analyzer {name!r}; expected one of {', '.join(_NAMED_ANALYZERS)}") from None
    return factory()


def tokenize(text: str | None, analyzer: Analyzer | str | None = None) -> list[str]:
    """Return the term sequence produced by ``analyzer`` for ``text``."""
    resolved = analyzer if callable(analyzer) else get_analyzer(analyzer)
    return [token.text for token in resolved(text or "")]
