"""
Structured logging configuration.

JSON output for deployments that ship logs to a collector. Session
status changes are logged through log_state_transition so every
transition carries the same summary fields.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# Attributes every LogRecord has; anything else came in through ``extra=``
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def _record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class StructuredFormatter(logging.Formatter):
    """
    Render each record as one JSON object per line.

    Keys: ``timestamp`` (UTC), ``level``, ``logger``, ``message``, then
    ``fields`` for whatever was passed via ``extra=`` and ``exception``
    when exc_info is set. Non-ASCII text is written as-is.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        fields = _record_fields(record)
        if fields:
            entry["fields"] = fields

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: str = "journeyx",
) -> logging.Logger:
    """
    Route the ``journeyx`` logger tree through StructuredFormatter.

    Existing handlers on that logger are replaced, so calling this twice
    does not duplicate output.

    Args:
        level: Logging level (default: INFO)
        log_file: Also append to this file when given
        logger_name: Root of the logger tree to configure

    Returns:
        The configured logger
    """
    formatter = StructuredFormatter()
    handlers: list = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.handlers = handlers
    return logger


def summarize_session(snapshot: Dict[str, Any]) -> Dict[str, Any]:
    """Reduce a session snapshot to the fields worth logging."""
    return {
        "session_id": snapshot.get("session_id"),
        "status": snapshot.get("status"),
        "has_plan": snapshot.get("plan") is not None,
        "is_current_saved": snapshot.get("is_current_saved"),
        "saved_count": len(snapshot.get("saved_trips") or []),
    }


def log_state_transition(
    event: str,
    state: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a planning session status change.

    Args:
        event: Transition name (e.g., "submit", "adjustment_failed")
        state: Session snapshot
        extra: Additional context, such as the from/to statuses
        logger: Defaults to the ``journeyx`` logger
    """
    logger = logger or logging.getLogger("journeyx")
    logger.info(
        f"State transition: {event}",
        extra={
            "event": event,
            "session": summarize_session(state),
            "context": extra or {},
        },
    )
