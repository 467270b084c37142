"""Document source adapters.

The index never touches storage directly; it asks a ``DocumentSource`` to
turn a location reference from the metadata snapshot into structured front
matter plus body. The filesystem implementation below reads markdown files
written by the spec store.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from specsearch.domain.document import ParsedSpec
from specsearch.utils.front_matter import FrontMatterError, load_front_matter


class DocumentLoadError(ValueError):
    """Raised when a document cannot be read or parsed."""

    def __init__(self, location: str | Path, message: str) -> None:
        super().__init__(f"{location}: {message}")
        self.location = str(location)
        self.message = message


@runtime_checkable
class DocumentSource(Protocol):
    """Protocol for anything able to fetch a spec by location reference."""

    def load(self, location: str | Path) -> ParsedSpec:  # pragma: no cover - interface definition
        ...


class FileDocumentSource:
    """Reads ``---``-delimited markdown specs from the filesystem."""

    def __init__(self, root: Path | None = None, encoding: str = "utf-8") -> None:
        self.root = root
        self.encoding = encoding

    def resolve(self, location: str | Path) -> Path:
        path = Path(location)
        if self.root is not None and not path.is_absolute():
            path = self.root / path
        return path

    def load(self, location: str | Path) -> ParsedSpec:
        if location is None or str(location) == "":
            raise DocumentLoadError("<empty>", "No location reference")

        path = self.resolve(location)
        try:
            content = path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentLoadError(path, f"Failed to read file: {exc}") from exc

        try:
            front_matter, body = load_front_matter(content)
        except FrontMatterError as exc:
            raise DocumentLoadError(path, str(exc)) from exc

        return ParsedSpec(front_matter=front_matter, body=body)


class InMemoryDocumentSource:
    """Dictionary-backed source, handy for embedding callers and tests."""

    def __init__(self, documents: dict[str, ParsedSpec] | None = None) -> None:
        self._documents: dict[str, ParsedSpec] = dict(documents or {})

    def put(self, location: str, parsed: ParsedSpec) -> None:
        self._documents[str(location)] = parsed

    def discard(self, location: str) -> None:
        self._documents.pop(str(location), None)

    def load(self, location: str | Path) -> ParsedSpec:
        try:
            return self._documents[str(location)]
        except KeyError as exc:
            raise DocumentLoadError(location, "Unknown document location") from exc
