"""Centralized logging helpers.

Provides one place to configure the root logger plus small helpers used by
the rest of the package for structured DEBUG traces:

- ``configure_logging`` sets up console (and optional file) handlers.
- ``extra_context`` builds the ``extra=`` mapping for structured records.
- ``is_debug_enabled`` guards expensive DEBUG payloads.
- ``safe_url`` strips credentials and query strings before logging a URL.
- ``Timer`` measures the duration of a block in milliseconds.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from collider.constants import Constants

_HANDLER_MARKER = "_collider_handler"


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    quiet: bool = False,
) -> None:
    """Configure the root logger.

    Level precedence: explicit ``level`` argument, then the
    ``COLLIDER_LOG_LEVEL`` environment variable, then WARNING.
    Calling this more than once replaces the handlers installed earlier.

    Args:
        level: Level name such as "DEBUG" or "INFO".
        log_file: Optional path that receives a copy of every record.
        quiet: Drop the console handler entirely.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "WARNING").upper()
    level_value = getattr(logging, level_name, logging.WARNING)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(Constants.LOG_FORMAT)
    if not quiet:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        setattr(console, _HANDLER_MARKER, True)
        root.addHandler(console)
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        setattr(file_handler, _HANDLER_MARKER, True)
        root.addHandler(file_handler)
    if quiet and not log_file:
        null = logging.NullHandler()
        setattr(null, _HANDLER_MARKER, True)
        root.addHandler(null)

    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records.

    None values are dropped so formatters never see half-filled fields.
    """
    return {key: value for key, value in fields.items() if value is not None}


def safe_url(url: str) -> str:
    """Return ``url`` without userinfo, query string or fragment."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


class Timer:
    """Context manager measuring elapsed wall-clock time."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds; measured up to now while still inside the block."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
