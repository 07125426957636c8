"""Logging setup based on loguru."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

__all__ = ["logger", "setup_logger"]

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    verbose: bool = False,
    log_file: Optional[Path] = None,
    level: str = "WARNING",
) -> None:
    """
    Configure loguru sinks.

    Rules:
    1. CONSOLE: DEBUG+ to stderr when verbose, otherwise ``level``+.
    2. FILE: DEBUG+ to ``log_file`` (rotated) when one is given.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level="DEBUG" if verbose else level.upper(),
    )

    if log_file is not None:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="1 week",
            level="DEBUG",
            format=FILE_FORMAT,
        )
