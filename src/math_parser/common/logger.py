"""Project-wide logger."""
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("math_parser")


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a stderr handler to the project logger and set its level.

    Called by the command-line entrypoint; applications embedding the library
    configure logging themselves. Calling it again does not add a second handler.

    :param level: Level name, defaults to ``MATH_PARSER_LOG_LEVEL`` or ``INFO``

    :return: Configured logger
    :rtype: logging.Logger
    """
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel((level or os.environ.get("MATH_PARSER_LOG_LEVEL", "INFO")).upper())
    return logger
