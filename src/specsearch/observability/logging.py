"""Structured JSON logging correlated with the current operation."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
import sys
from typing import TYPE_CHECKING, Any

import orjson

from specsearch.observability.context import get_trace_context


if TYPE_CHECKING:
    from specsearch.config import Settings


# Attributes every LogRecord has; anything else arrived through ``extra=``
_RESERVED_RECORD_KEYS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__.keys() | {"message", "asctime", "taskName"}
)

# Context keys copied onto every log line when an operation is bound
_CONTEXT_KEYS = ("operation", "spec_id")


class JsonFormatter(logging.Formatter):
    """One JSON object per record with trace and operation correlation.

    Fields passed through ``extra=`` are emitted at the top level. Keys that
    commonly hold credentials are masked and long string values are clipped.
    """

    REDACT_KEYS = frozenset({"password", "token", "api_key", "secret", "authorization"})
    MAX_MESSAGE_LEN = 2000
    MAX_VALUE_LEN = 500

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_trace_context()
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": _clip(record.getMessage(), self.MAX_MESSAGE_LEN),
            "trace_id": ctx.get("trace_id", ""),
            "span_id": ctx.get("span_id", ""),
        }
        if "." in record.name:
            entry["component"] = record.name.rsplit(".", 1)[-1]
        for key in _CONTEXT_KEYS:
            if key in ctx:
                entry[key] = ctx[key]

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_RECORD_KEYS or key.startswith("_"):
                continue
            entry[key] = self._redact(key, value)

        return orjson.dumps(entry, default=_json_default).decode("utf-8")

    def _redact(self, key: str, value: Any) -> Any:
        if key.lower() in self.REDACT_KEYS:
            return "[REDACTED]"
        if isinstance(value, str):
            return _clip(value, self.MAX_VALUE_LEN)
        return value


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def _json_default(value: Any) -> Any:
    if isinstance(value, set | frozenset):
        try:
            return sorted(value)
        except TypeError:
            return list(value)
    if isinstance(value, Path | Exception):
        return str(value)
    if isinstance(value, bytes | bytearray):
        return value.decode("utf-8", errors="replace")
    return repr(value)


def configure_logging(
    settings: Settings | None = None,
    *,
    level: str | None = None,
    json_output: bool | None = None,
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Install a single stdout handler on the root logger.

    Args:
        settings: Source of ``log_level``/``log_json`` when the explicit
            arguments are omitted
        level: Root log level name, e.g. "debug"
        json_output: Emit JSON lines instead of plain text
        logger_levels: Per-logger overrides (logger name -> level name)
    """
    if level is None:
        level = settings.log_level if settings is not None else "info"
    if json_output is None:
        json_output = settings.log_json if settings is not None else True

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    root.addHandler(handler)

    for logger_name, logger_level in (logger_levels or {}).items():
        logging.getLogger(logger_name).setLevel(getattr(logging, logger_level.upper(), logging.INFO))
