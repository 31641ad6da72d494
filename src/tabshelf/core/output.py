"""
Unified output system using Loguru.
Library code logs through loguru; user-facing CLI messages go through log()
so they land in the log file and on the console.
"""

import sys
from pathlib import Path

from loguru import logger

from .console import get_console


LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def setup_loguru(
    log_file: Path,
    level: str = "INFO",
    console_output: bool = False,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
) -> None:
    """
    Configure loguru with a rotating file sink and an optional stderr sink.

    Args:
        log_file: Path to log file
        level: Minimum level for logging (DEBUG, INFO, WARNING, ERROR)
        console_output: Also log to stderr
        max_file_size_mb: Maximum log file size before rotation
        backup_count: Number of rotated files to keep
    """
    # Remove default handler
    logger.remove()

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        rotation=f"{max_file_size_mb} MB",
        retention=backup_count,
        level=level,
        format=LOG_FORMAT,
        enqueue=False,  # Synchronous writes (thread-safe but blocking)
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_file} (level={level})")


# Rich styles for user-facing messages
LEVEL_STYLES = {
    "debug": "cyan",
    "info": None,
    "success": "green",
    "warning": "yellow",
    "error": "bold red",
}


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to the log file AND prints to the console.

    Use this instead of print() for user-facing messages that should also be logged.

    Args:
        message: User-facing message
        level: Log level (debug, info, success, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    style = LEVEL_STYLES.get(level)
    console = get_console()
    if style:
        console.print(message, style=style, markup=False, highlight=False)
    else:
        console.print(message, markup=False, highlight=False)
