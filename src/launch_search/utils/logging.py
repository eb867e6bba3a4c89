"""Structured logging setup for launch-search.

Records about one query carry its text and generation token. Both
formatters render those two fields ahead of any other context so that
interleaved output from overlapping document searches can be told apart.
"""

import json
import logging
import sys
from collections.abc import MutableMapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

# Package-level logger
logger = logging.getLogger("launch_search")

QUERY_FIELDS = ("query", "generation")


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Context fields attached to a record, or an empty dict."""
    context = getattr(record, "context", None)
    return dict(context) if isinstance(context, dict) else {}


class JSONFormatter(logging.Formatter):
    """JSON formatter for machine-readable logs.

    ``query`` and ``generation`` become top-level keys; any other context
    is nested under ``context``.
    """

    def format(self, record: logging.LogRecord) -> str:
        context = record_context(record)
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in QUERY_FIELDS:
            if field in context:
                log_data[field] = context.pop(field)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["location"] = f"{record.module}:{record.funcName}:{record.lineno}"
        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Single-line formatter: ``LEVEL logger [gen N "query"] message k=v``."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    DIM = "\033[2m"
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def _query_tag(self, context: dict[str, Any]) -> str:
        parts = []
        if "generation" in context:
            parts.append(f"gen {context.pop('generation')}")
        if "query" in context:
            parts.append(json.dumps(context.pop("query"), ensure_ascii=False))
        if not parts:
            return ""
        tag = f"[{' '.join(parts)}] "
        return f"{self.DIM}{tag}{self.RESET}" if self.use_color else tag

    def format(self, record: logging.LogRecord) -> str:
        context = record_context(record)
        tag = self._query_tag(context)
        message = record.getMessage()
        if context:
            message += " " + " ".join(f"{key}={value}" for key, value in context.items())
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        level = f"{record.levelname:8}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"
        return f"{level} {record.name}: {tag}{message}"


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    json_format: bool = False,
    use_color: bool = True,
) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Log level name; unknown names fall back to WARNING.
        log_file: Optional file that receives JSON records.
        json_format: Use JSON on stderr as well.
        use_color: Color the console level and query tag.

    Returns:
        The package logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    logger.setLevel(numeric_level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        JSONFormatter() if json_format else ConsoleFormatter(use_color=use_color)
    )
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """Log ``message`` with structured context fields.

    Args:
        logger: Logger instance.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **context: Fields rendered after the message; ``query`` and
            ``generation`` are rendered as the query tag.
    """
    logger.log(level, message, extra={"context": context}, stacklevel=2)


class QueryLogger(logging.LoggerAdapter):
    """Logger bound to one query and its generation token.

    Every record gets both fields, merged under any per-call
    ``extra={"context": ...}``.
    """

    def __init__(self, logger: logging.Logger, query: str, generation: int) -> None:
        super().__init__(logger, {"query": query, "generation": generation})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def log_context(self, level: int, message: str, **context: Any) -> None:
        """Like :func:`log_with_context`, with the bound query fields."""
        self.log(level, message, extra={"context": context}, stacklevel=2)
