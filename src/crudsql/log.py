"""Structured logging for crudsql using structlog.

Configuration:
- CRUDSQL_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL. Default: WARNING
- CRUDSQL_LOG_JSON: render JSON lines instead of console output (1, true, yes)

Usage:
    >>> from crudsql.log import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("metadata_emitted", type_name="UserAccount")
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Optional

import structlog
from structlog.types import Processor

DEFAULT_LEVEL = "WARNING"

_handler: Optional[logging.Handler] = None


def _level_from_env() -> str:
    return os.getenv("CRUDSQL_LOG_LEVEL", DEFAULT_LEVEL).upper()


def _json_from_env() -> bool:
    return os.getenv("CRUDSQL_LOG_JSON", "").lower() in ("1", "true", "yes")


def _configure_structlog(json_logs: bool) -> None:
    """Route structlog through stdlib logging so stdlib levels and handlers apply."""
    renderer: Processor
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """Configure stdlib logging (stderr) and structlog for command-line use.

    Logs go to stderr so stdout stays free for command output.
    """
    level_name = (level or _level_from_env()).upper()
    numeric_level = getattr(logging, level_name, logging.WARNING)
    if json_logs is None:
        json_logs = _json_from_env()

    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(_handler)
    root.setLevel(numeric_level)

    _configure_structlog(json_logs)


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger instance for module `name`."""
    return structlog.get_logger(name)


# Library use: honour stdlib levels without installing handlers.
_configure_structlog(_json_from_env())
