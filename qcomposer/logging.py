"""Logging utilities for qcomposer.

Every module asks for its logger through :func:`get_logger`, so all output
shares the ``qcomposer.*`` namespace, one package handler per logger and
``LOG_FORMAT``. Codec modules report skipped text lines at DEBUG and import
summaries at INFO; the session reports placements and rejections at DEBUG.

The starting level comes from ``QCOMPOSER_LOG_LEVEL``. The CLI overrides it
only when ``--log-level`` is given.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

from qcomposer.config import LOG_FORMAT, initial_log_level

_PACKAGE = "qcomposer"

_DEFAULT_LEVEL = initial_log_level()

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


class _PackageHandler(logging.StreamHandler):
    """Stream handler owned by qcomposer; other handlers on a logger are left alone."""


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _qualified_name(name: Optional[str]) -> str:
    """
    Map a module name onto the package namespace.

    ``None`` and ``"__main__"`` give the package logger, names already in
    the package are kept, anything else is nested below it.
    """
    if name is None or name == "__main__":
        return _PACKAGE
    if name == _PACKAGE or name.startswith(_PACKAGE + "."):
        return name
    return f"{_PACKAGE}.{name}"


def _package_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if isinstance(h, _PackageHandler)]


def _attach(
    logger: logging.Logger,
    level: int,
    stream: IO[str],
    fmt: str,
) -> None:
    for handler in _package_handlers(logger):
        logger.removeHandler(handler)

    handler = _PackageHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create the package logger for a module.

    Loggers are cached, and a logger gets its package handler only once.

    Args:
        name: Module name, typically ``__name__``. If None, returns the
            ``qcomposer`` logger.

    Returns:
        Logger named ``qcomposer.<module>``.

    Example:
        >>> from qcomposer.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("line %d: unknown gate %r, skipped", 4, "rx")
    """
    logger_name = _qualified_name(name)

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not _package_handlers(logger):
        _attach(logger, _DEFAULT_LEVEL, sys.stderr, LOG_FORMAT)

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every qcomposer logger and of loggers created later.

    Args:
        level: ``logging.DEBUG`` etc., or a name such as ``"DEBUG"``.
            Unknown names fall back to WARNING.
    """
    level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in _package_handlers(logger):
            handler.setLevel(level)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Re-route every qcomposer logger to ``stream`` at ``level``.

    Only the package's own handler is replaced; handlers attached by the
    host application stay in place.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses ``LOG_FORMAT``.
        stream: Output stream (default: sys.stderr at call time).
    """
    level = _coerce_level(level)
    if stream is None:
        stream = sys.stderr
    fmt = LOG_FORMAT if format_string is None else format_string

    for logger in _loggers.values():
        _attach(logger, level, stream, fmt)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level
