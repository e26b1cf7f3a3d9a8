"""Structured JSON logging on top of loguru with per-cycle trace ids."""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import IO, TYPE_CHECKING, Any
from uuid import uuid4

from loguru import logger

from nash_stats.core.logging.config import LogConfig

if TYPE_CHECKING:
    from loguru import Logger

_TRACE_ID_VAR: ContextVar[str | None] = ContextVar("nash_stats_trace_id", default=None)
_CONTEXT_VAR: ContextVar[dict[str, Any]] = ContextVar("nash_stats_log_context", default={})

# Keys promoted to the top level of each JSON payload.
_TOP_LEVEL_KEYS = {"trace_id", "error_code", "component"}


def _ensure_trace_id() -> str:
    trace_id = _TRACE_ID_VAR.get()
    if trace_id is None:
        trace_id = uuid4().hex
        _TRACE_ID_VAR.set(trace_id)
    return trace_id


def _patch_record(record: dict[str, Any]) -> None:
    extra = record["extra"]
    if not extra.get("trace_id"):
        extra["trace_id"] = _ensure_trace_id()

    for key, value in _CONTEXT_VAR.get().items():
        if extra.get(key) is None:
            extra[key] = value

    extra.setdefault("component", None)
    extra.setdefault("error_code", None)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if hasattr(value, "value"):
        return value.value
    return str(value)


def _format_payload(record: dict[str, Any]) -> dict[str, Any]:
    extra = record.get("extra", {})
    context = {k: v for k, v in extra.items() if k not in _TOP_LEVEL_KEYS}
    level = record.get("level")
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat() if "time" in record else datetime.now(UTC).isoformat(),
        "level": getattr(level, "name", "INFO"),
        "message": record.get("message"),
        "trace_id": extra.get("trace_id"),
        "error_code": extra.get("error_code"),
        "component": extra.get("component"),
    }
    if context:
        payload["context"] = context
    exception = record.get("exception")
    if exception is not None and exception.type is not None:
        payload["exception"] = f"{exception.type.__name__}: {exception.value}"
    return payload


def _render(record: dict[str, Any]) -> str:
    return json.dumps(_format_payload(record), default=_json_default)


class _StreamJsonSink:
    """Sink writing structured JSON payloads to a text stream."""

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def __call__(self, message: Any) -> None:
        self._stream.write(_render(message.record))
        self._stream.write("\n")
        self._stream.flush()


class _FileJsonSink:
    """Sink appending JSON lines to a file path."""

    def __init__(self, path: str) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._path = path

    def __call__(self, message: Any) -> None:
        with open(self._path, "a", encoding="utf-8") as file:
            file.write(_render(message.record))
            file.write("\n")


def _configure_from_config(config: LogConfig) -> None:
    handlers: list[dict[str, Any]] = []
    if config.console_output:
        stream = config.console_stream or sys.stderr
        handlers.append({"sink": _StreamJsonSink(stream), "level": config.level.upper()})
    if config.file_output and config.file_path:
        handlers.append({"sink": _FileJsonSink(config.file_path), "level": config.level.upper()})

    logger.configure(handlers=handlers, patcher=_patch_record, extra=dict(config.extra))


def configure_logging(level: str = "INFO", **kwargs: Any) -> None:
    """Configure structured logging with the provided level and options."""

    _configure_from_config(LogConfig(level=level, **kwargs))


def get_logger(component: str | None = None) -> Logger:
    """Return the logger, bound to ``component`` when given."""

    if component:
        return logger.bind(component=component)
    return logger


@contextmanager
def log_context(*, trace_id: str | None = None, **extra: Any) -> Iterator[str]:
    """Propagate a trace id and extra metadata to every log event in the block."""

    context_token = _CONTEXT_VAR.set({**_CONTEXT_VAR.get(), **extra})
    active_trace = trace_id or uuid4().hex
    trace_token = _TRACE_ID_VAR.set(active_trace)

    try:
        yield active_trace
    finally:
        _TRACE_ID_VAR.reset(trace_token)
        _CONTEXT_VAR.reset(context_token)


configure_logging()


__all__ = [
    "configure_logging",
    "get_logger",
    "log_context",
    "logger",
]
