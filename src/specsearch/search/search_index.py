"""In-memory inverted index with TF-IDF ranking for markdown specs.

The index maps every normalized term to the set of spec ids containing it and
keeps an IDF table that is recomputed eagerly after every mutation, so a
search never sees a value computed against a stale corpus size.

The index is not thread-safe. Callers serialize mutations (rebuild, index,
update, remove, clear); ``SpecSearchService`` does so with a single lock.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from specsearch.adapters.document_source import DocumentSource, FileDocumentSource
from specsearch.config import Settings
from specsearch.domain.document import ParsedSpec, SpecDocument, SpecMetadata
from specsearch.domain.search import (
    IndexBuildResult,
    IndexStats,
    IndexUpdateResult,
    SearchHit,
    SearchOptions,
    SkippedDocument,
    TermCount,
)
from specsearch.observability.metrics import (
    INDEX_BUILD_LATENCY,
    INDEX_DOC_COUNT,
    INDEX_SKIPPED_DOCUMENTS,
    INDEX_TERM_COUNT,
    SEARCH_LATENCY,
    track_latency,
)
from specsearch.observability.tracing import create_span
from specsearch.search.analyzers import Analyzer, IndexAnalyzer
from specsearch.search.scoring import apply_field_boosts, calculate_idf, log_tf
from specsearch.search.snippet import build_snippet


logger = logging.getLogger(__name__)

_TOP_TERMS = 10

# Per-document failures that must not abort a rebuild
_LOAD_ERRORS = (OSError, ValueError, TypeError)


@dataclass(frozen=True)
class _StoredFields:
    title: str
    category: str
    status: str


class MarkdownSearchIndex:
    """Inverted index over spec documents with TF-IDF relevance ranking."""

    def __init__(
        self,
        source: DocumentSource | None = None,
        *,
        settings: Settings | None = None,
        analyzer: Analyzer | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.source: DocumentSource = source or FileDocumentSource()
        self._analyzer: Analyzer = analyzer or IndexAnalyzer(
            min_length=self.settings.min_token_length,
            max_length=self.settings.max_token_length,
        )
        self._postings: dict[str, set[int]] = {}
        self._documents: dict[int, str] = {}
        self._term_counts: dict[int, Counter[str]] = {}
        self._stored: dict[int, _StoredFields] = {}
        self._idf: dict[str, float] = {}

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------
    @property
    def document_count(self) -> int:
        return len(self._documents)

    @property
    def term_count(self) -> int:
        return len(self._postings)

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._documents

    def postings(self, term: str) -> frozenset[int]:
        """Return the ids of documents containing ``term``."""
        return frozenset(self._postings.get(term.lower(), ()))

    def document_frequency(self, term: str) -> int:
        return len(self._postings.get(term.lower(), ()))

    def idf(self, term: str) -> float:
        """Cached IDF of ``term``; zero for unknown terms."""
        return self._idf.get(term.lower(), 0.0)

    def iter_terms(self) -> Iterator[str]:
        return iter(sorted(self._postings))

    def document_ids(self) -> list[int]:
        return sorted(self._documents)

    def get_document_text(self, doc_id: int) -> str | None:
        """Lower-cased searchable text stored for ``doc_id``."""
        return self._documents.get(doc_id)

    def tokenize(self, text: str) -> list[str]:
        return [token.text for token in self._analyzer(text or "")]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def build_from_files(self, snapshot: Any) -> IndexBuildResult:
        """Rebuild the index from a metadata snapshot.

        Args:
            snapshot: Mapping of id -> ``SpecMetadata``/dict, an iterable of
                entries, or an object exposing such a mapping as ``specs``.

        Returns:
            IndexBuildResult listing how many documents were indexed and which
            were skipped (with the reason). Skips never raise.
        """
        with create_span("search_index.build"), track_latency(INDEX_BUILD_LATENCY):
            logger.info("Building search index...")
            self.clear()

            skipped: list[SkippedDocument] = []
            for doc_id, entry in _iter_snapshot(snapshot):
                if isinstance(entry, Exception):
                    skipped.append(self._record_skip(doc_id, entry, operation="build"))
                    continue
                try:
                    document = self._load_document(doc_id, entry)
                except _LOAD_ERRORS as exc:
                    skipped.append(self._record_skip(doc_id, exc, operation="build"))
                    continue
                self._add(document)

            self._recalculate_idf()

        logger.info(
            "Search index built: %d documents, %d unique terms",
            self.document_count,
            self.term_count,
            extra={"documents_skipped": len(skipped)},
        )
        return IndexBuildResult(documents_indexed=self.document_count, skipped=tuple(skipped))

    def index_document(
        self,
        doc_id: int,
        *,
        title: str = "",
        category: str = "",
        status: str = "",
        body: str = "",
        tags: Iterable[str] = (),
    ) -> None:
        """Index an already-parsed spec, replacing any previous version."""
        document = SpecDocument(
            id=doc_id,
            title=title or "",
            category=category or "",
            status=status or "",
            tags=tuple(tags or ()),
            body=body or "",
        )
        self._add(document)
        self._recalculate_idf()

    def update_document(self, doc_id: int, location: str | Path) -> IndexUpdateResult:
        """Re-read one spec and refresh its postings.

        On a read or parse failure the spec stays out of the index; the failure
        is logged and reported in the result.
        """
        with create_span("search_index.update", spec_id=doc_id):
            self._discard(doc_id)
            try:
                parsed = self.source.load(location)
                document = SpecDocument.from_parsed(doc_id, parsed)
            except _LOAD_ERRORS as exc:
                skip = self._record_skip(doc_id, exc, operation="update")
                self._recalculate_idf()
                return IndexUpdateResult(doc_id=doc_id, indexed=False, reason=skip.reason)

            self._add(document)
            self._recalculate_idf()
            logger.debug("Updated search index for spec %s", doc_id)
            return IndexUpdateResult(doc_id=doc_id, indexed=True)

    def remove_document(self, doc_id: int) -> None:
        """Purge a spec from postings, stored text and metadata."""
        with create_span("search_index.remove", spec_id=doc_id):
            self._discard(doc_id)
            self._recalculate_idf()
        logger.debug("Removed spec %s from search index", doc_id)

    def clear(self) -> None:
        self._postings.clear()
        self._documents.clear()
        self._term_counts.clear()
        self._stored.clear()
        self._idf.clear()
        self._publish_gauges()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def search(
        self,
        query: str,
        options: SearchOptions | None = None,
        *,
        limit: int | None = None,
        min_score: float | None = None,
        include_snippets: bool = False,
    ) -> list[SearchHit]:
        """Rank indexed specs against ``query``.

        Keyword arguments are used only when ``options`` is not given.
        """
        if options is None:
            options = SearchOptions(limit=limit, min_score=min_score, include_snippets=include_snippets)

        query_tokens = self.tokenize(query)
        if not query_tokens:
            return []

        span_attributes = {"query.tokens": len(query_tokens)}
        with create_span("search_index.search", attributes=span_attributes), track_latency(SEARCH_LATENCY):
            scores: dict[int, float] = {}
            matched_terms: dict[int, dict[str, None]] = {}

            for token in query_tokens:
                matching_docs = self._postings.get(token)
                if not matching_docs:
                    continue
                idf = self._idf.get(token, 0.0)
                for doc_id in matching_docs:
                    tf = log_tf(self._term_counts[doc_id][token])
                    scores[doc_id] = scores.get(doc_id, 0.0) + tf * idf
                    matched_terms.setdefault(doc_id, {})[token] = None

            ranked: list[tuple[int, float]] = []
            for doc_id, score in scores.items():
                stored = self._stored[doc_id]
                boosted = apply_field_boosts(
                    score,
                    query_tokens,
                    title=stored.title,
                    category=stored.category,
                    title_boost=self.settings.title_boost,
                    category_boost=self.settings.category_boost,
                )
                ranked.append((doc_id, boosted / len(query_tokens)))

            ranked.sort(key=lambda item: (-item[1], item[0]))

            if options.min_score is not None:
                ranked = [item for item in ranked if item[1] >= options.min_score]
            if options.limit is not None:
                ranked = ranked[: options.limit]

            return [self._to_hit(doc_id, score, matched_terms, options) for doc_id, score in ranked]

    def get_stats(self) -> IndexStats:
        lengths = [len(text) for text in self._documents.values()]
        avg_length = sum(lengths) / (len(lengths) or 1)
        top_terms = sorted(self._postings.items(), key=lambda item: (-len(item[1]), item[0]))[:_TOP_TERMS]
        return IndexStats(
            document_count=self.document_count,
            term_count=self.term_count,
            avg_document_length=int(avg_length + 0.5),
            top_terms=[TermCount(term=term, count=len(docs)) for term, docs in top_terms],
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _load_document(self, doc_id: int, entry: SpecMetadata) -> SpecDocument:
        parsed: ParsedSpec = self.source.load(entry.file_path)
        return SpecDocument.from_parsed(doc_id, parsed, fallback=entry)

    def _add(self, document: SpecDocument) -> None:
        # a repeated id in a snapshot replaces the earlier version
        self._discard(document.id)
        text = document.searchable_text
        counts = Counter(self.tokenize(text))
        self._documents[document.id] = text
        self._term_counts[document.id] = counts
        self._stored[document.id] = _StoredFields(
            title=document.title,
            category=document.category,
            status=document.status,
        )
        for term in counts:
            self._postings.setdefault(term, set()).add(document.id)

    def _discard(self, doc_id: int) -> None:
        counts = self._term_counts.pop(doc_id, None)
        if counts:
            for term in counts:
                docs = self._postings.get(term)
                if docs is None:
                    continue
                docs.discard(doc_id)
                if not docs:
                    del self._postings[term]
        self._documents.pop(doc_id, None)
        self._stored.pop(doc_id, None)

    def _recalculate_idf(self) -> None:
        total_docs = len(self._documents)
        self._idf = {term: calculate_idf(len(docs), total_docs) for term, docs in self._postings.items()}
        self._publish_gauges()

    def _publish_gauges(self) -> None:
        INDEX_DOC_COUNT.set(len(self._documents))
        INDEX_TERM_COUNT.set(len(self._postings))

    def _record_skip(self, doc_id: int, exc: BaseException, *, operation: str) -> SkippedDocument:
        reason = f"{type(exc).__name__}: {exc}"
        logger.warning(
            "Failed to index spec %s: %s",
            doc_id,
            reason,
            extra={"spec_id": doc_id, "operation": operation},
        )
        INDEX_SKIPPED_DOCUMENTS.labels(operation=operation).inc()
        return SkippedDocument(doc_id=doc_id, reason=reason)

    def _to_hit(
        self,
        doc_id: int,
        score: float,
        matched_terms: Mapping[int, Mapping[str, None]],
        options: SearchOptions,
    ) -> SearchHit:
        stored = self._stored.get(doc_id)
        snippet = None
        if options.include_snippets:
            terms = list(matched_terms.get(doc_id, {}))
            text = self._documents.get(doc_id)
            if text and terms:
                snippet = build_snippet(
                    text,
                    terms,
                    context_words=self.settings.snippet_context_words,
                    max_chars=self.settings.snippet_max_chars,
                )
        return SearchHit(
            id=doc_id,
            score=score,
            title=stored.title if stored else None,
            category=stored.category if stored else None,
            status=stored.status if stored else None,
            snippet=snippet,
        )


def _iter_snapshot(snapshot: Any) -> Iterator[tuple[int, SpecMetadata | Exception]]:
    """Normalize the store's metadata snapshot into ``(id, SpecMetadata)`` pairs.

    Accepts a mapping keyed by spec id, the store's full metadata index (whose
    ``specs`` member holds that mapping), or a plain iterable of entries.
    Entries that fail validation are yielded as the error so the caller can
    report them as skipped.
    """
    specs = snapshot
    if isinstance(snapshot, Mapping):
        if isinstance(snapshot.get("specs"), Mapping):
            specs = snapshot["specs"]
    elif hasattr(snapshot, "specs"):
        specs = snapshot.specs

    items: list[tuple[Any, Any]]
    if isinstance(specs, Mapping):
        items = list(specs.items())
    else:
        items = [(None, entry) for entry in specs or ()]

    for key, entry in items:
        try:
            metadata = _coerce_metadata(key, entry)
        except (ValidationError, TypeError, ValueError) as exc:
            yield _coerce_id(key, entry), exc
            continue
        yield metadata.id, metadata


def _coerce_metadata(key: Any, entry: Any) -> SpecMetadata:
    if isinstance(entry, SpecMetadata):
        payload = entry.model_dump()
    elif isinstance(entry, Mapping):
        payload = dict(entry)
    else:
        raise TypeError(f"Unsupported snapshot entry: {type(entry).__name__}")
    if key is not None:
        payload["id"] = int(key)
    return SpecMetadata.model_validate(payload)


def _coerce_id(key: Any, entry: Any) -> int:
    candidate = key
    if candidate is None:
        candidate = entry.get("id") if isinstance(entry, Mapping) else getattr(entry, "id", None)
    try:
        return int(candidate)
    except (TypeError, ValueError):
        return -1
