"""Loguru setup for the web server: stderr plus a rotating file, both redacted."""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

DEFAULT_LOG_FILE = Path("instance") / "snippetbox.log"

# stdlib loggers forwarded into loguru, with the floor applied to each.
_FORWARDED_LOGGERS = {
    "werkzeug": logging.INFO,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
}

_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")


def log_file_path() -> Path:
    """``LOG_FILE`` when set, otherwise ``instance/snippetbox.log`` under the cwd."""
    configured = os.getenv("LOG_FILE")
    if configured:
        return Path(configured)
    return Path.cwd() / DEFAULT_LOG_FILE


class _InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _logger.opt(depth=depth, exception=record.exc_info).bind(
            request_id=_REQUEST_ID.get(),
        ).log(level, record.getMessage())


class ContextualLogger:
    """Proxy for loguru that tags every line with the current request id."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(request_id=_REQUEST_ID.get()), name)


def set_correlation_id(value: str | None) -> None:
    _REQUEST_ID.set(value or "-")


def clear_correlation_id() -> None:
    _REQUEST_ID.set("-")


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> Path:
    level = (level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")).upper()
    log_file = log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    _logger.configure(extra={"request_id": "-"})
    _logger.add(
        sys.stderr,
        level=level,
        format=_FMT,
        colorize=True,
        backtrace=False,
        diagnose=False,
        filter=sanitize_record,
    )
    _logger.add(
        str(log_file),
        level=level,
        format=_FMT,
        colorize=False,
        backtrace=False,
        diagnose=False,
        enqueue=True,
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        filter=sanitize_record,
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, floor in _FORWARDED_LOGGERS.items():
        logging.getLogger(name).setLevel(floor)
    return log_file


logger = ContextualLogger()

__all__ = [
    "DEFAULT_LOG_FILE",
    "clear_correlation_id",
    "log_file_path",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
