"""
Structured Logging with Trace IDs
=================================

Every record is one JSON object: timestamp, level, component, message,
an optional ``trace_id`` and any extra fields. A trace id set with
``trace_context()`` follows a single schema request or gateway call through
the logs. Secrets are redacted from messages and string fields.
"""

import json
import logging
import re
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from functools import partialmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from clawgate.config.settings import LoggingConfig

ROOT_LOGGER = "clawgate"

_trace_id_var: ContextVar[str | None] = ContextVar("clawgate_trace_id", default=None)

_SECRET_PATTERNS = re.compile(
    r"(sk-[A-Za-z0-9_-]+|ghp_[A-Za-z0-9]+|Bearer\s+[A-Za-z0-9._~+/=-]+)",
    re.IGNORECASE,
)

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _redact_secrets(text: str) -> str:
    return _SECRET_PATTERNS.sub("[REDACTED]", text)


def current_trace_id() -> str | None:
    return _trace_id_var.get()


@contextmanager
def trace_context(trace_id: str | None = None) -> Iterator[str]:
    """Tag every record logged inside the block with ``trace_id`` (a short uuid by default)."""
    trace_id = trace_id or uuid.uuid4().hex[:8]
    token = _trace_id_var.set(trace_id)
    try:
        yield trace_id
    finally:
        _trace_id_var.reset(token)


class StructuredLogger:
    """
    JSON logger bound to one component, with optional fixed fields

    Example output:
    {
        "timestamp": "2026-10-18T10:30:45.123456+00:00",
        "level": "INFO",
        "component": "Gateway",
        "message": "Gateway call skills.status finished",
        "trace_id": "4f1c2a9b",
        "method": "skills.status",
        "outcome": "ok"
    }
    """

    def __init__(self, component: str, fields: dict[str, Any] | None = None) -> None:
        self.component = component
        self.fields = dict(fields or {})
        self.logger = logging.getLogger(f"{ROOT_LOGGER}.{component}")

    def bind(self, **fields: Any) -> "StructuredLogger":
        """Child logger that adds ``fields`` to every record."""
        return StructuredLogger(self.component, {**self.fields, **fields})

    def _log(self, level: int, message: str, **fields: Any) -> None:
        if not self.logger.isEnabledFor(level):
            return
        entry: dict[str, Any] = {
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "level": logging.getLevelName(level),
            "component": self.component,
            "message": _redact_secrets(message),
        }
        trace_id = current_trace_id()
        if trace_id:
            entry["trace_id"] = trace_id
        for key, value in {**self.fields, **fields}.items():
            entry[key] = _redact_secrets(value) if isinstance(value, str) else value
        self.logger.log(level, _redact_secrets(json.dumps(entry, default=str)))

    debug = partialmethod(_log, logging.DEBUG)
    info = partialmethod(_log, logging.INFO)
    warning = partialmethod(_log, logging.WARNING)
    error = partialmethod(_log, logging.ERROR)


def get_logger(component: str) -> StructuredLogger:
    return StructuredLogger(component)


def configure_logging(config: "LoggingConfig") -> None:
    """Install a single stderr handler on the ``clawgate`` logger.

    JSON format passes the structured payload through untouched; text
    format prefixes each record with time, level and logger name.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s" if config.format == "json" else _TEXT_FORMAT))

    root = logging.getLogger(ROOT_LOGGER)
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(config.level)
