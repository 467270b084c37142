"""Domain layer - value objects shared by the index, classifier and similarity helpers.

This layer has no infrastructure dependencies. Every operation of the engine
returns one of these explicit records instead of loosely shaped dictionaries.
"""

from specsearch.domain.classification import (
    AlternativeCategory,
    CategoryAnalysis,
    CategoryDetectionResult,
    CategoryPattern,
    CategoryScore,
    CategorySuggestion,
)
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
from specsearch.domain.similarity import MatchCandidate, RankedMatch, SimilarityResult


__all__ = [
    "AlternativeCategory",
    "CategoryAnalysis",
    "CategoryDetectionResult",
    "CategoryPattern",
    "CategoryScore",
    "CategorySuggestion",
    "IndexBuildResult",
    "IndexStats",
    "IndexUpdateResult",
    "MatchCandidate",
    "ParsedSpec",
    "RankedMatch",
    "SearchHit",
    "SearchOptions",
    "SimilarityResult",
    "SkippedDocument",
    "SpecDocument",
    "SpecMetadata",
    "TermCount",
]
