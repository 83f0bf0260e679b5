"""
Logging setup shared by the CLI and the HTTP API.

Everything logs under the ``task_tracker`` namespace, either as plain text
lines or as one JSON object per line.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "task_tracker"

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """
    Render each record as a single JSON object.

    Keys: timestamp, level, logger, message, then any extra fields. Records at
    ERROR and above also get a ``location`` block; exceptions are included
    as formatted text.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.levelno >= logging.ERROR:
            entry["location"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS
        )
        return json.dumps(entry, default=str)


class ContextLogger(logging.LoggerAdapter):
    """
    Adapter that stamps bound context onto every record.

    Per-call ``extra`` wins over bound context on key clashes::

        logger = get_logger("queries", handler="filter")
        logger.debug("Filtered tasks", extra={"result_count": 3})
    """

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs


def _make_formatter(log_format: str) -> logging.Formatter:
    if log_format == "structured":
        return StructuredFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def _rotating_file_handler(log_file: str | Path) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )


def setup_logging(
    level: str = "INFO",
    log_format: str = "simple",
    log_file: str | Path | None = None,
) -> None:
    """
    Configure the ``task_tracker`` logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Log level name, any case (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "structured" for JSON lines, "simple" for text
        log_file: Also write to this file, rotated at 10MB
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level.upper())
    logger.handlers.clear()

    # stderr, so command output on stdout stays clean
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(_rotating_file_handler(log_file))

    formatter = _make_formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str, **context: Any) -> ContextLogger:
    """
    Return a logger under the ``task_tracker`` namespace.

    ``name`` is prefixed with ``task_tracker.`` unless it already is; keyword
    arguments become context attached to every record.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return ContextLogger(logging.getLogger(name), context)
