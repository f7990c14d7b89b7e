"""Loguru sink configuration."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Replace the default loguru handler with a stderr sink and, optionally, a
    rotating file sink.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path for a rotating log file
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation="10 MB",
            retention=5,
            level=level,
            format=LOG_FORMAT,
            enqueue=False,
        )
    logger.debug(f"Logging initialized (level={level}, file={log_file})")
