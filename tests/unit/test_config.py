"""Unit tests for Settings."""

from pydantic import ValidationError
import pytest

from specsearch.config import Settings, get_default_settings


pytestmark = pytest.mark.unit


def test_defaults_match_reference_scoring():
    settings = Settings()

    assert settings.title_boost == 2.0
    assert settings.category_boost == 1.5
    assert (settings.min_token_length, settings.max_token_length) == (3, 49)
    assert (settings.cosine_weight, settings.jaccard_weight, settings.keyword_boost) == (0.6, 0.4, 0.1)
    assert settings.new_category_threshold == 0.3


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TITLE_BOOST", "3.5")
    monkeypatch.setenv("LOG_JSON", "false")

    settings = get_default_settings()

    assert settings.title_boost == 3.5
    assert settings.log_json is False


def test_token_bounds_are_validated():
    with pytest.raises(ValidationError, match="MIN_TOKEN_LENGTH"):
        Settings(min_token_length=10, max_token_length=5)


def test_similarity_weights_must_not_exceed_one():
    with pytest.raises(ValidationError, match="COSINE_WEIGHT"):
        Settings(cosine_weight=0.8, jaccard_weight=0.4)


def test_boosts_below_one_are_rejected():
    with pytest.raises(ValidationError):
        Settings(title_boost=0.5)
