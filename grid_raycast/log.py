"""
Console logging setup for the grid_raycast package.
"""
import logging
import sys
from typing import Optional, TextIO

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO",
                  fmt: str = DEFAULT_FORMAT,
                  stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach one console handler to the package logger and set its level.

    Calling it again replaces the handler instead of stacking another one.
    """
    logger = logging.getLogger("grid_raycast")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in logger.handlers[:]:
        if getattr(handler, "_grid_raycast_console", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    handler._grid_raycast_console = True
    logger.addHandler(handler)
    return logger
