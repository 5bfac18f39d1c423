"""
Logging system for SnipCheck
Structured logging to stderr with optional rotating log files
"""

import sys
from pathlib import Path
from typing import Optional
from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Setup logger with console and (optionally) file handlers

    Stdout is left alone: the summary is printed there.

    Args:
        level: Minimum log level
        log_file: Path of the main log file, None disables file logging
    """
    # Remove default handler
    logger.remove()

    # Console handler with color
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level.upper(),
        colorize=True,
    )

    if not log_file:
        return

    # File handler with rotation
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        str(log_path),
        format=FILE_FORMAT,
        level=level.upper(),
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        encoding="utf-8",
    )

    # Error file handler
    error_log_file = log_path.parent / f"{log_path.stem}_error.log"
    logger.add(
        str(error_log_file),
        format=FILE_FORMAT,
        level="ERROR",
        rotation="10 MB",
        retention="60 days",
        compression="zip",
        encoding="utf-8",
    )


def get_logger(name: str):
    """Get a named logger"""
    return logger.bind(name=name)
