"""Domain models for search functionality.

Value objects are immutable (frozen=True) and carry the exact field set the
dashboard, CLI and tool layers render without a follow-up lookup.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchOptions(BaseModel):
    """Optional knobs for a search call.

    A ``limit`` of zero or less means no truncation. ``min_score`` is compared
    against the normalized TF-IDF score, which is not capped at 1.0.
    """

    model_config = ConfigDict(frozen=True)

    limit: int | None = None
    min_score: float | None = Field(default=None, ge=0.0)
    include_snippets: bool = False

    @field_validator("limit")
    @classmethod
    def _non_positive_limit_is_unlimited(cls, value: int | None) -> int | None:
        if value is not None and value <= 0:
            return None
        return value


class SearchHit(BaseModel):
    """A single ranked search result with denormalized metadata."""

    model_config = ConfigDict(frozen=True)

    id: int
    score: float
    title: str | None = None
    category: str | None = None
    status: str | None = None
    snippet: str | None = None


class TermCount(BaseModel):
    """Number of documents a term occurs in."""

    model_config = ConfigDict(frozen=True)

    term: str
    count: int


class IndexStats(BaseModel):
    """Snapshot of inverted index statistics."""

    model_config = ConfigDict(frozen=True)

    document_count: int
    term_count: int
    avg_document_length: int
    top_terms: list[TermCount] = Field(default_factory=list)


class SkippedDocument(BaseModel):
    """A document that could not be read or parsed during indexing."""

    model_config = ConfigDict(frozen=True)

    doc_id: int
    reason: str


class IndexBuildResult(BaseModel):
    """Outcome of a full index rebuild."""

    model_config = ConfigDict(frozen=True)

    documents_indexed: int = 0
    skipped: tuple[SkippedDocument, ...] = ()

    @property
    def documents_skipped(self) -> int:
        return len(self.skipped)

    @property
    def is_complete(self) -> bool:
        """True when every document in the snapshot made it into the index."""
        return not self.skipped


class IndexUpdateResult(BaseModel):
    """Outcome of re-indexing a single document."""

    model_config = ConfigDict(frozen=True)

    doc_id: int
    indexed: bool
    reason: str | None = None
