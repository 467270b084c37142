"""Unit tests for document source adapters."""

import pytest

from specsearch.adapters.document_source import (
    DocumentLoadError,
    DocumentSource,
    FileDocumentSource,
    InMemoryDocumentSource,
)
from specsearch.domain.document import ParsedSpec


@pytest.mark.unit
class TestFileDocumentSource:
    def test_load_relative_to_root(self, tmp_path, spec_writer):
        spec_writer("auth.md", {"title": "Login", "category": "authentication"}, "Body text")

        parsed = FileDocumentSource(root=tmp_path).load("auth.md")

        assert parsed.front_matter == {"category": "authentication", "title": "Login"}
        assert parsed.body == "Body text"

    def test_load_absolute_path_ignores_root(self, tmp_path, spec_writer):
        path = spec_writer("abs.md", {"title": "Absolute"}, "x")

        parsed = FileDocumentSource(root=tmp_path / "elsewhere").load(path)

        assert parsed.front_matter["title"] == "Absolute"

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentLoadError) as exc_info:
            FileDocumentSource(root=tmp_path).load("missing.md")

        assert exc_info.value.location.endswith("missing.md")
        assert "Failed to read file" in exc_info.value.message

    def test_missing_front_matter(self, tmp_path):
        (tmp_path / "plain.md").write_text("# Plain\n", encoding="utf-8")

        with pytest.raises(DocumentLoadError, match="front matter"):
            FileDocumentSource(root=tmp_path).load("plain.md")

    def test_undecodable_file(self, tmp_path):
        (tmp_path / "binary.md").write_bytes(b"\xff\xfe\x00garbage")

        with pytest.raises(DocumentLoadError):
            FileDocumentSource(root=tmp_path).load("binary.md")

    def test_empty_location(self):
        with pytest.raises(DocumentLoadError):
            FileDocumentSource().load("")

    def test_load_error_is_a_value_error(self):
        assert issubclass(DocumentLoadError, ValueError)


@pytest.mark.unit
class TestInMemoryDocumentSource:
    def test_put_load_discard(self):
        source = InMemoryDocumentSource()
        parsed = ParsedSpec(front_matter={"title": "T"}, body="b")

        source.put("specs/1", parsed)
        assert source.load("specs/1") is parsed

        source.discard("specs/1")
        with pytest.raises(DocumentLoadError, match="Unknown document location"):
            source.load("specs/1")

    def test_sources_satisfy_protocol(self):
        assert isinstance(InMemoryDocumentSource(), DocumentSource)
        assert isinstance(FileDocumentSource(), DocumentSource)
