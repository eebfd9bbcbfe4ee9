"""
Loguru sink configuration for processes embedding the progression engine.
"""

from __future__ import annotations

import sys

from loguru import logger

from progression.config import get_settings


def configure_logging(level: str | None = None, log_file: str | None = None) -> None:
    """
    Replace loguru's default handler with the engine's sinks.

    Args:
        level: Minimum level for stderr output (defaults to settings.log_level)
        log_file: Optional log file path (defaults to settings.log_file)
    """
    settings = get_settings()
    level = level or settings.log_level
    log_file = log_file or settings.log_file

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )

    if log_file:
        logger.add(
            log_file,
            level="DEBUG",
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
        )
