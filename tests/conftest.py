"""Shared test fixtures and configuration."""

from pathlib import Path

import pytest

from specsearch.adapters.document_source import FileDocumentSource, InMemoryDocumentSource
from specsearch.config import Settings
from specsearch.domain.document import ParsedSpec
from specsearch.utils.front_matter import serialize_front_matter


# Environment overrides that would change ranking or classification defaults
TEST_ENV = {
    "LOG_LEVEL": "info",
    "LOG_JSON": "true",
    "TITLE_BOOST": "2.0",
    "CATEGORY_BOOST": "1.5",
    "MIN_TOKEN_LENGTH": "3",
    "MAX_TOKEN_LENGTH": "49",
    "SNIPPET_CONTEXT_WORDS": "10",
    "SNIPPET_MAX_CHARS": "200",
    "MAX_ALTERNATIVE_CATEGORIES": "3",
    "COSINE_WEIGHT": "0.6",
    "JACCARD_WEIGHT": "0.4",
    "KEYWORD_BOOST": "0.1",
}


# Three specs used by the end-to-end search scenarios
SAMPLE_SPECS = {
    1: {
        "title": "User Authentication",
        "category": "authentication",
        "status": "draft",
        "tags": ["oauth", "jwt"],
        "body": "Users sign in through OAuth providers and receive a signed JWT for later requests.",
    },
    2: {
        "title": "Payment Processing",
        "category": "payments",
        "status": "approved",
        "tags": ["stripe"],
        "body": "Charge customers with Stripe and keep billing history for every invoice.",
    },
    3: {
        "title": "API Design Guidelines",
        "category": "api",
        "status": "draft",
        "tags": [],
        "body": "Every REST endpoint uses plural nouns and consistent error envelopes.",
    },
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Pin configuration so a developer's environment cannot change scores."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def settings() -> Settings:
    return Settings()


def write_spec(root: Path, name: str, front_matter: dict, body: str) -> Path:
    """Write a markdown spec with YAML front matter under ``root``."""
    path = root / name
    path.write_text(serialize_front_matter(front_matter, body), encoding="utf-8")
    return path


@pytest.fixture
def spec_corpus(tmp_path: Path) -> tuple[FileDocumentSource, dict[int, dict]]:
    """Sample specs on disk plus the metadata snapshot that points at them."""
    snapshot: dict[int, dict] = {}
    for doc_id, spec in SAMPLE_SPECS.items():
        name = f"spec-{doc_id}.md"
        front_matter = {key: spec[key] for key in ("title", "category", "status", "tags")}
        write_spec(tmp_path, name, front_matter, spec["body"])
        snapshot[doc_id] = {
            "title": spec["title"],
            "category": spec["category"],
            "status": spec["status"],
            "file_path": name,
        }
    return FileDocumentSource(root=tmp_path), snapshot


@pytest.fixture
def memory_corpus() -> tuple[InMemoryDocumentSource, dict[int, dict]]:
    """The sample specs served from memory."""
    source = InMemoryDocumentSource()
    snapshot: dict[int, dict] = {}
    for doc_id, spec in SAMPLE_SPECS.items():
        location = f"memory/{doc_id}"
        front_matter = {key: spec[key] for key in ("title", "category", "status", "tags")}
        source.put(location, ParsedSpec(front_matter=front_matter, body=spec["body"]))
        snapshot[doc_id] = {"title": spec["title"], "category": spec["category"], "file_path": location}
    return source, snapshot


@pytest.fixture
def spec_writer(tmp_path: Path):
    """Return a helper writing specs into the test's temporary directory."""

    def _write(name: str, front_matter: dict, body: str) -> Path:
        return write_spec(tmp_path, name, front_matter, body)

    return _write
