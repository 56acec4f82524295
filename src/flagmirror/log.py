"""structlog setup for processes embedding flagmirror."""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from .config import LogSection

REDACTED = "***"
SECRET_KEYS = frozenset({"access_token", "sdk_key", "authorization"})


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask credential values bound to log events."""
    for key in event_dict.keys() & SECRET_KEYS:
        if event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def _renderer(format: str) -> list[structlog.types.Processor]:
    if format == "text":
        return [structlog.dev.ConsoleRenderer()]
    return [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(section: LogSection) -> structlog.stdlib.BoundLogger:
    """Route flagmirror's structlog events through stdlib logging.

    Returns the "flagmirror" logger. Module loggers created with
    ``structlog.get_logger`` pick up the configuration on first use.
    """
    level = logging.getLevelName(section.level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger("flagmirror").setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_secrets,
            *_renderer(section.format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.stdlib.get_logger("flagmirror")
