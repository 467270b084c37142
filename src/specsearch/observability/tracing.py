"""OpenTelemetry spans around index and classification operations."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.trace import Status, StatusCode

from specsearch.observability.context import operation_context, update_span_id


if TYPE_CHECKING:
    from collections.abc import Generator

    from opentelemetry.trace import Span, Tracer

logger = logging.getLogger(__name__)

_tracer_holder: dict[str, Tracer | None] = {"tracer": None}


def init_tracing(
    service_name: str = "specsearch",
    *,
    span_processors: Iterable[SpanProcessor] = (),
    resource_attributes: dict[str, str] | None = None,
) -> TracerProvider:
    """Create a tracer provider for the engine and route spans to ``span_processors``.

    The provider is kept local to this module rather than installed globally,
    so embedding applications keep control of their own provider.
    """
    provider = TracerProvider(resource=Resource.create({"service.name": service_name, **(resource_attributes or {})}))
    for processor in span_processors:
        provider.add_span_processor(processor)
    _tracer_holder["tracer"] = provider.get_tracer("specsearch")
    logger.info("Tracing initialized for service: %s", service_name)
    return provider


def get_tracer() -> Tracer:
    """Tracer from ``init_tracing``, else one from the global provider."""
    if _tracer_holder["tracer"] is None:
        _tracer_holder["tracer"] = trace.get_tracer("specsearch")
    return _tracer_holder["tracer"]  # type: ignore[return-value]


@contextmanager
def create_span(
    name: str,
    attributes: dict[str, Any] | None = None,
    *,
    spec_id: int | None = None,
) -> Generator[Span, None, None]:
    """Run the block as operation ``name`` inside a span of the same name.

    Log records emitted inside the block carry the operation name, the spec
    id (when given) and the span id.
    """
    with operation_context(name, spec_id=spec_id), get_tracer().start_as_current_span(name) as span:
        span.set_attribute("specsearch.operation", name)
        if spec_id is not None:
            span.set_attribute("specsearch.spec_id", spec_id)
        for key, value in (attributes or {}).items():
            span.set_attribute(key, value)

        span_context = span.get_span_context()
        if span_context.is_valid:
            update_span_id(format(span_context.span_id, "016x"))

        try:
            yield span
        except Exception as exc:
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            span.record_exception(exc)
            raise
