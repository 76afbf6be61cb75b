"""Centralized logging configuration using loguru."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]}:{function}:{line} - {message}"

logger.configure(extra={"name": "benchmark"})
logger.remove()
_handler_ids: list[int] = [logger.add(sys.stderr, level="INFO", format=CONSOLE_FORMAT, colorize=True)]


def configure_logging(level: str = "INFO", log_dir: Optional[Path] = None) -> None:
    """Replace the active sinks.

    The console sink logs at ``level``. With ``log_dir`` set, a rotating
    DEBUG log of every run and a separate ERROR log for failed builds and
    unreadable result files are written there as well.

    Args:
        level: Console log level
        log_dir: Directory for log files, or None to log to the console only
    """
    for handler_id in _handler_ids:
        logger.remove(handler_id)
    _handler_ids.clear()

    _handler_ids.append(logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True))

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        _handler_ids.append(
            logger.add(
                log_dir / "benchmark_{time}.log",
                rotation="20 MB",
                retention="10 days",
                level="DEBUG",
                format=FILE_FORMAT,
            )
        )
        _handler_ids.append(
            logger.add(
                log_dir / "errors_{time}.log",
                rotation="10 MB",
                retention="30 days",
                level="ERROR",
                format=FILE_FORMAT,
            )
        )
    logger.debug(f"Logging configured (console={level}, files={log_dir})")


def get_logger(name: Optional[str] = None):
    """Get a logger bound to a module name.

    Args:
        name: Module name for the logger (usually __name__)

    Returns:
        Configured logger instance
    """
    if name:
        return logger.bind(name=name)
    return logger


def log_performance(operation: str, duration_ms: float, threshold_ms: float = 100.0) -> None:
    """Log how long an operation took, warning when it exceeds a threshold."""
    if duration_ms > threshold_ms:
        logger.warning(f"Slow operation: {operation} took {duration_ms:.2f}ms (threshold: {threshold_ms}ms)")
    else:
        logger.debug(f"{operation} took {duration_ms:.2f}ms")


__all__ = ["configure_logging", "get_logger", "log_performance", "logger"]
