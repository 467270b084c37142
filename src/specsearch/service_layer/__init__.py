"""Service layer - use case orchestration over the index and the classifiers."""

from .spec_search_service import SpecSearchService


__all__ = [
    "SpecSearchService",
]
