"""Domain models for category classification.

Categories are data, not an enumeration: a ``CategoryPattern`` bundles the
compiled regular expressions, keywords and priority of one category and can
be registered or replaced at runtime.
"""

from collections.abc import Sequence
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryPattern(BaseModel):
    """Scoring signals for one category."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(min_length=1)
    patterns: tuple[re.Pattern[str], ...] = ()
    keywords: tuple[str, ...] = ()
    priority: int = 5

    @field_validator("patterns", mode="before")
    @classmethod
    def _compile_patterns(cls, value: Sequence[str | re.Pattern[str]]) -> tuple[re.Pattern[str], ...]:
        compiled: list[re.Pattern[str]] = []
        for item in value or ():
            if isinstance(item, re.Pattern):
                compiled.append(item if item.flags & re.IGNORECASE else re.compile(item.pattern, re.IGNORECASE))
            else:
                compiled.append(re.compile(item, re.IGNORECASE))
        return tuple(compiled)

    @field_validator("keywords", mode="before")
    @classmethod
    def _normalize_keywords(cls, value: Sequence[str]) -> tuple[str, ...]:
        return tuple(str(keyword) for keyword in value or ())

    @property
    def max_score(self) -> float:
        """Best achievable score: every regex and keyword hit, all in the title."""
        max_pattern_score = len(self.patterns) * 5
        max_keyword_score = len(self.keywords) * 2
        return (max_pattern_score * 2 + max_keyword_score) * (self.priority / 10)


class AlternativeCategory(BaseModel):
    """Runner-up category with its confidence."""

    model_config = ConfigDict(frozen=True)

    category: str
    confidence: float


class CategoryDetectionResult(BaseModel):
    """Best category for a document plus ranked alternatives."""

    model_config = ConfigDict(frozen=True)

    category: str
    confidence: float = Field(ge=0.0, le=1.0)
    matched_keywords: list[str] = Field(default_factory=list)
    alternative_categories: list[AlternativeCategory] = Field(default_factory=list)


class CategoryScore(BaseModel):
    """Per-category breakdown produced by ``CategoryDetector.analyze``."""

    model_config = ConfigDict(frozen=True)

    category: str
    score: float
    confidence: float
    matched_keywords: list[str] = Field(default_factory=list)
    pattern_matches: int = 0


class CategoryAnalysis(BaseModel):
    """Full classification report for a document."""

    model_config = ConfigDict(frozen=True)

    detected_category: str
    confidence: float
    all_scores: list[CategoryScore] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class CategorySuggestion(BaseModel):
    """Category proposed by similarity against existing specs."""

    model_config = ConfigDict(frozen=True)

    category: str
    confidence: str
    score: float
    create_new_category: bool = False
