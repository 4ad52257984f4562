"""Loguru setup with per-request correlation ids and masked output."""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _loguru

from .sensitive_filter import sanitize_record

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>req={extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<lvl>{message}</lvl>"
)

NOISY_LOGGERS = {
    "werkzeug": logging.INFO,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
}

_correlation_id: ContextVar[str] = ContextVar("tailorshop_correlation_id", default="-")


class _StdlibBridge(logging.Handler):
    """Forwards stdlib records (werkzeug, sqlalchemy, httpx) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _loguru.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _loguru.bind(correlation_id=_correlation_id.get()).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Looks like loguru's logger but always carries the current correlation id."""

    def __getattr__(self, name: str):
        return getattr(_loguru.bind(correlation_id=_correlation_id.get()), name)


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value or "-")


def get_correlation_id() -> str:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set("-")


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    level = level.upper()

    _loguru.remove()
    _loguru.configure(patcher=sanitize_record, extra={"correlation_id": "-"})
    _loguru.add(sys.stderr, level=level, format=LOG_FORMAT, backtrace=False, diagnose=False)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _loguru.add(
            path,
            level=level,
            format=LOG_FORMAT,
            colorize=False,
            backtrace=False,
            diagnose=False,
            enqueue=True,
            rotation="10 MB",
            encoding="utf-8",
        )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    for name, noisy_level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)


logger = ContextualLogger()

__all__ = [
    "ContextualLogger",
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
