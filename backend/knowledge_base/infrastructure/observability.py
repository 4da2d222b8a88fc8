"""Structured Logging - group-command log records as JSON or annotated text.

Invariants:
    - Every record carries timestamp, level, logger name, and message
    - Group context (group_id, active_group_id, url, error_code, path) is kept
      in both formats when the caller passed it via extra=
    - setup_logging owns exactly one root handler, however often lifespan runs

Design Decisions:
    - Standard logging with a custom Formatter; callers only use extra=
    - Text format appends the same group context as key=value pairs so a
      rejected add_url reads the same in a terminal as in the JSON stream
"""

import logging
import json
from datetime import datetime, timezone

GROUP_CONTEXT_FIELDS: tuple[str, ...] = (
    "group_id", "active_group_id", "url", "error_code", "path",
)

_HANDLER_NAME = "knowledge_base"


def _group_context(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in GROUP_CONTEXT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record, group context flattened in."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_group_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class GroupContextTextFormatter(logging.Formatter):
    """Human-readable line with group context appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _group_context(record)
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        return f"{line} [{pairs}]"


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Install the knowledge_base root handler, replacing a previous one."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else GroupContextTextFormatter(),
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
