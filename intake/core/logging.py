"""Structured log output: one `[LEVEL] {json}` line per record, extras merged into the payload."""

import json
import logging

# Attributes every LogRecord carries; anything else was passed via `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class StructuredFormatter(logging.Formatter):
    """Render a record as `[LEVEL] {"message": ..., "logger": ..., **extra}`."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "message": record.getMessage(),
            "logger": record.name,
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return f"[{record.levelname}] {json.dumps(payload, default=str)}"


def configure_logging(level: str = "INFO") -> None:
    """Install the structured formatter on the root logger (idempotent)."""
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        if isinstance(handler.formatter, StructuredFormatter):
            return
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)
