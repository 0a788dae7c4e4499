"""
Unified output system using Loguru.
Progress messages go to the log file and, unless quiet, to the console.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import get_data_dir
from .console import safe_print

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"

_quiet = False


def get_log_file_path() -> Path:
    """Get the path to the log file."""
    return get_data_dir() / "lastfm-archiver.log"


def setup_loguru(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    console_output: bool = False,
) -> Path:
    """
    Configure loguru for file logging with optional stderr output.

    Args:
        log_file: Path to log file (default: ~/.local/share/lastfm-archiver/lastfm-archiver.log)
        level: Minimum level for logging (DEBUG, INFO, WARNING, ERROR)
        console_output: Whether to also write log records to stderr

    Returns:
        Path of the log file in use
    """
    log_file = log_file if log_file else get_log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        log_file,
        rotation="10 MB",
        retention=5,  # Keep 5 backup files
        level=level.upper(),
        format=LOG_FORMAT,
        enqueue=False,
    )

    if console_output:
        logger.add(sys.stderr, level=level.upper(), format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_file} (level={level})")
    return log_file


def set_quiet(quiet: bool) -> None:
    """Suppress console echo of log() messages (file logging continues)."""
    global _quiet
    _quiet = quiet


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to the log file AND prints to the console.

    Use this instead of print() for user-facing messages that should also be logged.

    Args:
        message: User-facing message
        level: Log level (debug, info, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    if _quiet or level == "debug":
        return

    style = {"warning": "yellow", "error": "red"}.get(level)
    safe_print(message, style=style)
