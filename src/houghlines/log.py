"""Loguru setup."""

import sys

from loguru import logger


def setup_logging(level="INFO"):
    logger.remove()
    logger.add(sys.stderr, level=level, backtrace=False, diagnose=False)
    logger.enable("houghlines")
    return logger
