"""Logging configuration."""

import logging
import sys
from typing import TextIO

from calcufy.utils.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str = "calcufy", stream: TextIO = sys.stdout) -> logging.Logger:
    """Setup and configure logger.

    The stdio transport owns stdout for JSON-RPC traffic, so it calls this
    again with ``stream=sys.stderr`` before serving.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    # Remove existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logger.addHandler(console_handler)

    return logger


# Global logger instance
logger = setup_logger()
