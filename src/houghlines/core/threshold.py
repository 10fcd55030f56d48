"""Binarize a raster against a scalar cutoff."""

import numpy as np
from loguru import logger

from .config import clamp_parameter
from .raster import RasterBuffer


def threshold_raster(buffer, threshold=0.5):
    """Return a new buffer holding 1.0 where buffer > threshold and 0.0 elsewhere."""
    threshold = clamp_parameter("threshold", float(threshold), 0.0, 1.0)
    binary = RasterBuffer(buffer.width, buffer.height, buffer.margin)
    binary.interior[...] = np.where(buffer.interior > threshold, 1.0, 0.0)
    logger.debug(
        "Thresholded {}x{} raster at {}: {} on-pixels",
        buffer.width, buffer.height, threshold, binary.nonzero_count(),
    )
    return binary
