"""Spec search service orchestration layer.

Owns one search index and one category detector and serialises every call on
them with a single lock, so the service can be shared between threads.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
from pathlib import Path
import threading
from typing import Any

from specsearch.adapters.document_source import DocumentSource
from specsearch.config import Settings
from specsearch.domain.classification import CategoryAnalysis, CategoryDetectionResult
from specsearch.domain.document import SpecMetadata
from specsearch.domain.search import IndexBuildResult, IndexStats, IndexUpdateResult, SearchHit, SearchOptions
from specsearch.domain.similarity import MatchCandidate, RankedMatch
from specsearch.search.search_index import MarkdownSearchIndex
from specsearch.services.category_detector import CategoryDetector, round_confidence
from specsearch.services.category_patterns import DEFAULT_CATEGORY
from specsearch.services.smart_categorizer import SmartCategorizer
from specsearch.utils.similarity import find_best_match


logger = logging.getLogger(__name__)


class SpecSearchService:
    """High-level API over indexing, ranking and categorization of specs."""

    def __init__(
        self,
        source: DocumentSource | None = None,
        *,
        settings: Settings | None = None,
        index: MarkdownSearchIndex | None = None,
        detector: CategoryDetector | None = None,
        categorizer: SmartCategorizer | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            source: Where spec files are read from (defaults to the filesystem)
            settings: Shared configuration; resolved from the environment if omitted
            index: Prebuilt index, mainly for tests
            detector: Pattern-based category detector
            categorizer: Similarity-based fallback categorizer
        """
        self.settings = settings or Settings()
        self.index = index or MarkdownSearchIndex(source, settings=self.settings)
        self.detector = detector or CategoryDetector(settings=self.settings)
        self.categorizer = categorizer or SmartCategorizer(settings=self.settings)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Index maintenance
    # ------------------------------------------------------------------
    def rebuild(self, snapshot: Any) -> IndexBuildResult:
        with self._lock:
            result = self.index.build_from_files(snapshot)
        if not result.is_complete:
            logger.warning(
                "Index rebuilt with %d skipped spec(s)",
                result.documents_skipped,
                extra={"skipped_ids": [skip.doc_id for skip in result.skipped]},
            )
        return result

    def index_document(self, doc_id: int, **fields: Any) -> None:
        with self._lock:
            self.index.index_document(doc_id, **fields)

    def update_document(self, doc_id: int, location: str | Path) -> IndexUpdateResult:
        with self._lock:
            return self.index.update_document(doc_id, location)

    def remove_document(self, doc_id: int) -> None:
        with self._lock:
            self.index.remove_document(doc_id)

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
        with self._lock:
            return self.index.search(
                query,
                options,
                limit=limit,
                min_score=min_score,
                include_snippets=include_snippets,
            )

    def get_stats(self) -> IndexStats:
        with self._lock:
            return self.index.get_stats()

    def related_documents(self, doc_id: int, limit: int = 5) -> list[RankedMatch]:
        """Rank the other indexed specs by text similarity to ``doc_id``.

        Returns an empty list for an unknown id or a non-positive limit.
        """
        if limit <= 0:
            return []
        with self._lock:
            target = self.index.get_document_text(doc_id)
            if target is None:
                return []
            candidates = [
                MatchCandidate(id=str(other_id), text=self.index.get_document_text(other_id) or "")
                for other_id in self.index.document_ids()
                if other_id != doc_id
            ]
        return find_best_match(target, candidates, settings=self.settings)[:limit]

    # ------------------------------------------------------------------
    # Categorization
    # ------------------------------------------------------------------
    def categorize(
        self,
        title: str,
        body: str,
        existing: Iterable[SpecMetadata | Mapping[str, Any]] | None = None,
    ) -> CategoryDetectionResult:
        """Detect a category, falling back to similarity with existing specs.

        The similarity fallback is consulted only when pattern detection finds
        nothing, and its answer is used only at medium or high confidence.
        """
        result = self.detector.detect_with_confidence(title, body)
        if result.category != DEFAULT_CATEGORY or existing is None:
            return result

        suggestion = self.categorizer.suggest(title, body, existing)
        if suggestion is None or suggestion.confidence == "low":
            return result

        logger.info(
            "Pattern detection found no category; using similarity match %s",
            suggestion.category,
            extra={"similarity_score": suggestion.score},
        )
        return CategoryDetectionResult(
            category=suggestion.category,
            confidence=round_confidence(min(1.0, suggestion.score)),
        )

    def analyze_category(self, title: str, body: str) -> CategoryAnalysis:
        return self.detector.analyze(title, body)
