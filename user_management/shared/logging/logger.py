"""Loguru setup shared by the HTTP layer and the use cases.

Every record carries the request correlation id so a single registration or
login can be followed through the store and token layers. All sinks run the
sensitive-data filter before formatting.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_NO_CORRELATION = "-"
_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default=_NO_CORRELATION)

# Records emitted before setup_logging() still need the extra key.
_logger.configure(extra={"correlation_id": _NO_CORRELATION})

_NOISY_LOGGERS = {
    "werkzeug": logging.INFO,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
}


class _InterceptHandler(logging.Handler):
    """Route stdlib logging (werkzeug, sqlalchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.opt(depth=6, exception=record.exc_info).bind(
            correlation_id=_CORRELATION_ID.get()
        ).log(level, record.getMessage())


class ContextualLogger:
    """Proxy for loguru that injects correlation ids via ContextVar."""

    def __getattr__(self, name: str) -> Any:  # pragma: no cover
        return getattr(_logger.bind(correlation_id=_CORRELATION_ID.get()), name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or _NO_CORRELATION)


def clear_correlation_id() -> None:
    _CORRELATION_ID.set(_NO_CORRELATION)


def _sink_options(level: str, *, colorize: bool) -> dict[str, Any]:
    return {
        "level": level,
        "format": _FMT,
        "filter": sanitize_record,
        "colorize": colorize,
        "backtrace": False,
        # diagnose would print local variables, passwords included.
        "diagnose": False,
    }


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    resolved = (level or os.getenv("LOG_LEVEL") or "INFO").upper()

    _logger.remove()
    _logger.add(sys.stderr, **_sink_options(resolved, colorize=True))

    if log_file:
        directory = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(directory, exist_ok=True)
        _logger.add(
            log_file,
            enqueue=True,
            encoding="utf-8",
            **_sink_options(resolved, colorize=False),
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, noisy_level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)


logger = ContextualLogger()

__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
]
