"""Prometheus metrics for the search and classification engine."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


SEARCH_LATENCY = Histogram(
    "specsearch_search_latency_seconds",
    "Search query latency",
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5),
)

INDEX_BUILD_LATENCY = Histogram(
    "specsearch_index_build_seconds",
    "Full index rebuild latency",
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0),
)

INDEX_DOC_COUNT = Gauge(
    "specsearch_index_document_count",
    "Documents in index",
)

INDEX_TERM_COUNT = Gauge(
    "specsearch_index_term_count",
    "Distinct terms in index",
)

INDEX_SKIPPED_DOCUMENTS = Counter(
    "specsearch_index_skipped_documents_total",
    "Documents skipped because they could not be read or parsed",
    ["operation"],
)

CATEGORY_DETECTIONS = Counter(
    "specsearch_category_detections_total",
    "Category detections by resulting category",
    ["category"],
)


@contextmanager
def track_latency(histogram: Histogram, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        target = histogram.labels(**labels) if labels else histogram
        target.observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get content type for metrics endpoint."""
    return CONTENT_TYPE_LATEST
