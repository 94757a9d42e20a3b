"""Logging setup for the ``donmai`` logger hierarchy.

Library modules log through ``logging.getLogger("donmai.<area>")`` and never
install handlers themselves. Applications opt in once at startup:

    >>> from donmai.runtime.observability import configure_logging
    >>> configure_logging(format="text", level="DEBUG")

    >>> # JSON lines for log aggregation
    >>> configure_logging(format="json", level="INFO")

    >>> # Or straight from DONMAI_LOG_* environment variables
    >>> configure_from_settings()
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TextIO

import orjson

if TYPE_CHECKING:
    from donmai.foundation.config import DonmaiSettings, LoggingSettings

ROOT_LOGGER = "donmai"
TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Attributes every LogRecord has; anything else came in through ``extra=``
_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        data.update((k, v) for k, v in vars(record).items() if k not in _RESERVED)
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return orjson.dumps(data, default=str, option=orjson.OPT_NON_STR_KEYS).decode()


def configure_logging(
    format: str = "text",  # noqa: A002 - shadows builtin but matches stdlib
    level: str = "WARNING",
    *,
    output: TextIO | None = None,
) -> logging.Logger:
    """Configure the ``donmai`` logger.

    Args:
        format: "text" (human), "json" (machine) or "none" (no own output,
            records still propagate to the root logger)
        level: Minimum log level - DEBUG, INFO, WARNING, ERROR
        output: Output stream (default: stderr for text, stdout for json)

    Returns:
        The configured ``donmai`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    handler: logging.Handler
    if format == "text":
        handler = logging.StreamHandler(output or sys.stderr)
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    elif format == "json":
        handler = logging.StreamHandler(output or sys.stdout)
        handler.setFormatter(JsonFormatter())
    elif format == "none":
        handler = logging.NullHandler()
    else:
        raise ValueError(f"Unknown format: {format}. Use 'text', 'json', or 'none'")

    logger.addHandler(handler)
    logger.propagate = format == "none"
    return logger


def configure_from_settings(settings: DonmaiSettings | LoggingSettings | None = None) -> logging.Logger:
    """Apply logging settings (defaults to the cached global settings).

    Given root DonmaiSettings, ``debug=True`` (DONMAI_DEBUG) forces DEBUG level
    regardless of ``logging.level``.
    """
    from donmai.foundation.config import LoggingSettings, get_settings

    if settings is None:
        settings = get_settings()
    if isinstance(settings, LoggingSettings):
        log_settings, debug = settings, False
    else:
        log_settings, debug = settings.logging, settings.debug
    return configure_logging(format=log_settings.format, level="DEBUG" if debug else log_settings.level)
