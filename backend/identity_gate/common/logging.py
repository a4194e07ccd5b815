"""
Logging setup

Configures loguru for processes that embed the identity client.
"""

import sys
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def setup_logging(level: Optional[str] = None, colorize: bool = True) -> int:
    """
    Configure loguru logging.

    Removes the default handler and installs a single stderr sink.

    Args:
        level: Minimum log level; settings.log_level when None
        colorize: Colorize console output

    Returns:
        Handler id of the installed sink
    """
    if level is None:
        from identity_gate.core.settings import settings

        level = settings.log_level

    logger.remove()
    handler_id = logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level.upper(),
        colorize=colorize,
    )
    logger.debug(f"Logging configured at level {level.upper()}")
    return handler_id
