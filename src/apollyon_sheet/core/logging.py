"""Structured logging for the Apollyon character sheet.

structlog renders every entry, either as console lines while editing a
sheet locally or as JSON lines for collection. When a log file is
configured, both structlog entries and stdlib records (Streamlit's own)
are appended to that file instead of stdout.

Example:
    >>> from apollyon_sheet.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Sheet imported", motes=3, inventory=4)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from apollyon_sheet.core.config import Settings


APP_TAG = "apollyon_sheet"
STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Quiet third-party loggers that flood the sheet page at INFO.
NOISY_LOGGERS = ("streamlit", "watchdog", "urllib3")

_log_stream: IO[str] | None = None


def tag_app(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Stamp each entry with the application tag."""
    event_dict.setdefault("app", APP_TAG)
    return event_dict


def _open_stream(log_file: str | Path | None) -> IO[str]:
    global _log_stream

    if _log_stream is not None:
        _log_stream.close()
        _log_stream = None
    if not log_file:
        return sys.stdout

    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    _log_stream = path.open("a", encoding="utf-8")
    return _log_stream


def _renderer(json_format: bool, *, colors: bool) -> list[Processor]:
    if json_format:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=colors,
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | Path | None = None,
) -> None:
    """Configure application-wide logging.

    Calling it again replaces the previous configuration and closes a
    previously opened log file.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output logs in JSON format.
        log_file: Append logs to this file instead of stdout.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    stream = _open_stream(log_file)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            tag_app,
            structlog.processors.StackInfoRenderer(),
            *_renderer(json_format, colors=stream is sys.stdout),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format=STDLIB_FORMAT, level=numeric_level, stream=stream, force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_from_settings(settings: Settings) -> None:
    """Configure logging from the application settings."""
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        log_file=settings.log_file,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context carried by every later entry in this context.

    Example:
        >>> bind_context(sheet="Kael")
        >>> logger.info("Category selected")  # includes sheet="Kael"
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all bound context."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "bind_context",
    "clear_context",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]
