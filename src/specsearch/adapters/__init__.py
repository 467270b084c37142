"""Adapters connecting the engine to external document stores."""

from specsearch.adapters.document_source import (
    DocumentLoadError,
    DocumentSource,
    FileDocumentSource,
    InMemoryDocumentSource,
)


__all__ = [
    "DocumentLoadError",
    "DocumentSource",
    "FileDocumentSource",
    "InMemoryDocumentSource",
]
