"""
Logging configuration for the mindmap editor.

The TUI owns the terminal, so by default everything goes to a rotating
log file; a stderr sink is only added when asked for.
"""

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger


LOG_LEVEL_ENV = "MINDMAP_LOG_LEVEL"


def resolve_log_level(configured: Optional[str] = None) -> str:
    """Environment wins over the config file, INFO otherwise."""
    return (os.environ.get(LOG_LEVEL_ENV) or configured or "INFO").upper()


def configure_logging(level: Optional[str] = None,
                      log_file: Optional[str] = None,
                      console: bool = False) -> None:
    """
    Configure loguru sinks.

    This should be called once at startup.
    """
    level = resolve_log_level(level)
    logger.remove()  # Remove default handler

    if log_file:
        Path(log_file).expanduser().parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            sink=str(Path(log_file).expanduser()),
            level=level,
            rotation="10 MB",
            retention="7 days",
        )

    if console:
        logger.add(
            sink=sys.stderr,
            level=level,
            colorize=True
        )

    logger.info(f"Mindmap editor logging configured: level={level}, file={log_file}, console={console}")
