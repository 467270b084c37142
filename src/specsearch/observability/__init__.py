"""Observability module for structured logging, tracing, and metrics."""

from specsearch.observability.context import get_trace_context, operation_context, set_trace_context, trace_context
from specsearch.observability.logging import JsonFormatter, configure_logging
from specsearch.observability.metrics import (
    CATEGORY_DETECTIONS,
    INDEX_BUILD_LATENCY,
    INDEX_DOC_COUNT,
    INDEX_SKIPPED_DOCUMENTS,
    INDEX_TERM_COUNT,
    SEARCH_LATENCY,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from specsearch.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "CATEGORY_DETECTIONS",
    "INDEX_BUILD_LATENCY",
    "INDEX_DOC_COUNT",
    "INDEX_SKIPPED_DOCUMENTS",
    "INDEX_TERM_COUNT",
    "SEARCH_LATENCY",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "operation_context",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
