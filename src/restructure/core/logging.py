"""Logging configuration for restructure.

This module provides centralized logging configuration using loguru.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

_configured = False


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    rotation: str = "10 MB",
    retention: int = 5,
    force: bool = False,
) -> None:
    """Configure logging for restructure.

    Args:
        level: Logging level for the file sink (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for logging
        rotation: Size at which the log file is rotated
        retention: Number of rotated files to keep
        force: Reconfigure even if logging was already set up
    """
    global _configured

    if _configured and not force:
        return

    logger.remove()

    # Console only gets warnings and errors; rich prints the status lines
    logger.add(
        sys.stderr,
        level="WARNING",
        format="{time:HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
        colorize=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            level=level.upper(),
            format="{time:YYYY-MM-DD HH:mm:ss,SSS} - {name} - {level} - {message}",
            rotation=rotation,
            retention=retention,
        )

    intercept_standard_logging()
    _configured = True


def get_logger(name: str) -> "logger":
    """Get a logger bound to the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logger.bind(name=name)


class InterceptHandler(logging.Handler):
    """Redirect standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def intercept_standard_logging() -> None:
    """Intercept standard library logging and redirect to loguru."""
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


__all__ = ["logger", "get_logger", "configure_logging"]
