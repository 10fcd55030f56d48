"""Straight line detection with a classical Hough transform."""

from loguru import logger

__version__ = "0.1.0"

# Library use stays silent until setup_logging is called.
logger.disable("houghlines")
