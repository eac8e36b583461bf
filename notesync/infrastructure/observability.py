"""Structured Logging — JSON and text formatters for client and server processes.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Sync context fields (operation, note_id, error_code, status_code, path, count)
      are surfaced in both formats when present
    - setup_logging() is idempotent: calling it twice does not double every line

Design Decisions:
    - Stdlib formatters; fmt selects JSON for servers, text for local runs
    - Host process calls setup_logging once (server lifespan or build_client)
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "operation", "note_id", "error_code", "status_code", "path", "count",
)

_HANDLER_NAME = "notesync"


def _context(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in CONTEXT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable line with context fields appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s — %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure root logging for the process."""
    handler = next(
        (h for h in logging.root.handlers if h.get_name() == _HANDLER_NAME),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        logging.root.addHandler(handler)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
