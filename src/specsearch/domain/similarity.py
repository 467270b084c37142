"""Domain models for text similarity results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SimilarityResult(BaseModel):
    """Combined similarity score and the terms that drove it."""

    model_config = ConfigDict(frozen=True)

    score: float
    matched_terms: list[str] = Field(default_factory=list)
    method: Literal["cosine", "jaccard", "tfidf"] = "cosine"


class MatchCandidate(BaseModel):
    """A text to compare against a target, optionally with boosting keywords."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    keywords: tuple[str, ...] = ()


class RankedMatch(BaseModel):
    """A candidate with its similarity and 1-based rank."""

    model_config = ConfigDict(frozen=True)

    id: str
    similarity: SimilarityResult
    rank: int = Field(ge=1)
