"""Centralized configuration for specsearch using Pydantic Settings."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Every default reproduces the reference scoring behavior, so callers that
    never touch the environment get the documented ranking and classification.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore extra env vars not defined in model
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    # Relevance scoring
    title_boost: float = Field(default=2.0, ge=1.0, description="Score multiplier when a query term hits the title")
    category_boost: float = Field(
        default=1.5, ge=1.0, description="Score multiplier when a query term hits the category name"
    )

    # Index tokenizer bounds (inclusive)
    min_token_length: int = Field(default=3, ge=1, description="Shortest token kept by the index analyzer")
    max_token_length: int = Field(default=49, ge=1, description="Longest token kept by the index analyzer")

    # Snippets
    snippet_context_words: int = Field(
        default=10, ge=1, description="Words of context before a match; one fewer follows it"
    )
    snippet_max_chars: int = Field(default=200, ge=20, description="Fallback snippet length when nothing matches")

    # Classifier
    classifier_suggestion_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Confidence below which analyze() suggests adding more specific keywords",
    )
    alternative_suggestion_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Confidence above which the top alternative category is suggested",
    )
    max_alternative_categories: int = Field(default=3, ge=0, description="Alternatives reported per detection")

    # Similarity
    cosine_weight: float = Field(default=0.6, ge=0.0, le=1.0, description="Weight of cosine similarity")
    jaccard_weight: float = Field(default=0.4, ge=0.0, le=1.0, description="Weight of Jaccard similarity")
    keyword_boost: float = Field(default=0.1, ge=0.0, le=1.0, description="Bonus per keyword shared by both texts")
    new_category_threshold: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Top similarity below which a new category should be proposed",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "Settings":
        if self.min_token_length > self.max_token_length:
            raise ValueError("MIN_TOKEN_LENGTH must not exceed MAX_TOKEN_LENGTH")
        if self.cosine_weight + self.jaccard_weight > 1.0 + 1e-9:
            raise ValueError("COSINE_WEIGHT + JACCARD_WEIGHT must not exceed 1.0")
        return self


def get_default_settings() -> Settings:
    """Return settings resolved from the current environment."""
    return Settings()
