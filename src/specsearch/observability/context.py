"""Per-operation context shared by log records and spans.

Every index or classifier operation runs inside ``operation_context`` so the
JSON log lines it emits carry the same trace id, the operation name and, when
known, the spec id being processed.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4


trace_context: ContextVar[dict | None] = ContextVar("specsearch_trace_context", default=None)


def get_trace_context() -> dict:
    """Return the current context, starting a fresh trace when there is none."""
    ctx = trace_context.get()
    if ctx is None or not ctx.get("trace_id"):
        ctx = {"trace_id": uuid4().hex, "span_id": uuid4().hex[:16]}
        trace_context.set(ctx)
    return ctx


def set_trace_context(trace_id: str, span_id: str, **fields: object) -> None:
    trace_context.set({"trace_id": trace_id, "span_id": span_id, **fields})


def update_span_id(span_id: str) -> None:
    """Point log correlation at a new span without leaving the trace."""
    trace_context.set({**get_trace_context(), "span_id": span_id})


@contextmanager
def operation_context(operation: str, **fields: object) -> Iterator[dict]:
    """Bind ``operation`` (and e.g. ``spec_id``) for the duration of the block.

    Nested blocks inherit the trace id; the previous context is restored on
    exit, including when the block raises.
    """
    bound = {**get_trace_context(), "operation": operation}
    bound.update({key: value for key, value in fields.items() if value is not None})
    token = trace_context.set(bound)
    try:
        yield bound
    finally:
        trace_context.reset(token)
