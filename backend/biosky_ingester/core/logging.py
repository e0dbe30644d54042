"""Logging utilities for the BioSky ingester.

Status code attaches context through ``extra={"ctx_...": value}``. The
formatters below know which of those keys the service emits and render them
under stable names, next to a UTC RFC 3339 timestamp in the same format the
HTTP API uses.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Mapping

import orjson

_DEFAULT_LEVEL = os.environ.get("BIOSKY_LOG_LEVEL", "INFO")

CONTEXT_FIELDS: Mapping[str, str] = {
    "ctx_error_kind": "error_kind",
    "ctx_cursor": "cursor",
    "ctx_previous_cursor": "previous_cursor",
    "ctx_started_at": "started_at",
    "ctx_port": "port",
}


def record_time(record: logging.LogRecord) -> str:
    """Creation time of ``record`` as UTC RFC 3339 with milliseconds."""
    created = datetime.fromtimestamp(record.created, tz=timezone.utc)
    return created.isoformat(timespec="milliseconds")


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Known ``ctx_`` extras under their public names; unknown ones keep the prefix stripped."""
    context: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if not key.startswith("ctx_"):
            continue
        context[CONTEXT_FIELDS.get(key, key[len("ctx_") :])] = value
    return context


class JsonFormatter(logging.Formatter):
    """One JSON object per line for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": record_time(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = record_context(record)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str).decode("utf-8")


class TextFormatter(logging.Formatter):
    """Human-readable lines with context appended as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record_time(record)} {record.levelname} {record.name}: {record.getMessage()}"
        context = record_context(record)
        if context:
            line += " " + " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str | int = _DEFAULT_LEVEL, use_json: bool = True) -> None:
    """Route all logging to stdout through the service formatter."""
    logging.captureWarnings(True)
    root = logging.getLogger()
    root.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if use_json else TextFormatter())
    root.handlers = [handler]


def get_logger(name: str = "biosky_ingester") -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


__all__ = ["CONTEXT_FIELDS", "JsonFormatter", "TextFormatter", "configure_logging", "get_logger"]
