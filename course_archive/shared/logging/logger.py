"""Loguru setup with per-request correlation ids."""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)
_DEFAULT_LOG_FILE = Path(__file__).resolve().parents[2] / "instance" / "course_archive.log"
_QUIET_LOGGERS = {"werkzeug": logging.INFO, "sqlalchemy.engine": logging.WARNING}

_request_id: ContextVar[str] = ContextVar("correlation_id", default="-")

_logger.configure(extra={"correlation_id": "-"})


def set_correlation_id(value: str | None) -> None:
    _request_id.set(value or "-")


def get_correlation_id() -> str:
    return _request_id.get()


def clear_correlation_id() -> None:
    _request_id.set("-")


class ContextualLogger:
    """Binds the current correlation id on every call."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(correlation_id=_request_id.get()), name)


class _StdlibBridge(logging.Handler):
    """Routes stdlib records (werkzeug, sqlalchemy) through loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.bind(correlation_id=_request_id.get()).opt(
            depth=6, exception=record.exc_info
        ).log(level, record.getMessage())


def _resolve_level(level: str | None, debug_mode: bool) -> str:
    if level:
        return level.upper()
    if debug_mode:
        return "DEBUG"
    return os.getenv("LOG_LEVEL", "INFO").upper()


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    level = _resolve_level(level, debug_mode)
    log_file = Path(os.getenv("LOG_FILE") or _DEFAULT_LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    sink_options = {
        "level": level,
        "format": _FORMAT,
        "filter": sanitize_record,
        "backtrace": debug_mode,
        "diagnose": False,
    }
    _logger.add(sys.stderr, colorize=True, **sink_options)
    _logger.add(
        str(log_file),
        colorize=False,
        enqueue=True,
        encoding="utf-8",
        **sink_options,
    )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for name, stdlib_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(stdlib_level)


logger = ContextualLogger()

__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
