"""Logging setup for hubpull.

Normal runs log through rich so that log lines sit next to the console
output. Structured mode switches to timestamped lines with ``key=value``
context fields, for reading alongside the debug call trace.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "hubpull"
STRUCTURED_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends context fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "extra_fields", None)
        if not fields:
            return message
        return message + " " + " ".join(f"{k}={v}" for k, v in fields.items())


def configure_logging(
    level: str = "INFO",
    structured: bool = False,
    console: Console | None = None,
) -> None:
    """Configure the ``hubpull`` logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Timestamped lines with context fields instead of rich output
        console: Console for rich output (defaults to stderr)
    """
    handler: logging.Handler
    if structured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(StructuredFormatter(STRUCTURED_FORMAT))
    else:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``hubpull`` namespace.

    Args:
        name: Module name, prefixed with ``hubpull.`` when missing
    """
    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


class ContextAdapter(logging.LoggerAdapter):
    """Attaches fixed context fields to every record it logs."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["extra_fields"] = {**self.extra, **extra.get("extra_fields", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextAdapter:
    """Get a logger that tags every message with ``context``.

    Example:
        log = get_logger_with_context(__name__, namespace="futuresecureai")
        log.info("Could not enumerate repositories")
    """
    return ContextAdapter(get_logger(name), context)
