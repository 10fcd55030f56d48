"""Find local maxima in an accumulator raster."""

import numpy as np
from loguru import logger
from scipy import ndimage

from .config import clamp_parameter
from .raster import RasterBuffer


def _footprints(radius):
    """Square neighbourhood without its centre, and the part preceding the centre in raster order."""
    size = 2 * radius + 1
    neighbours = np.ones((size, size), dtype=bool)
    neighbours[radius, radius] = False
    earlier = np.zeros((size, size), dtype=bool)
    earlier[:radius, :] = True
    earlier[radius, :radius] = True
    return neighbours, earlier


def find_maxima(accumulator, threshold=10.0, radius=1, suppress_ties=True):
    """Return a maxima map keeping the value of every local maximum above threshold.

    A cell is kept when it is strictly above threshold and not below any
    neighbour within ``radius`` (8-connected for radius 1).  With
    ``suppress_ties`` such a cell is dropped when an equal one precedes it in
    raster order, so a plateau yields only its first cell.  Samples
    outside the raster count as zero and the margin of the result stays zero.
    """
    threshold = clamp_parameter("maxima_threshold", float(threshold), 0.0)
    radius = int(clamp_parameter("maxima_radius", int(radius), 1))
    samples = accumulator.samples
    neighbours, earlier = _footprints(radius)
    neighbour_max = ndimage.maximum_filter(
        samples, footprint=neighbours, mode="constant", cval=0.0
    )
    keep = (samples > threshold) & (samples >= neighbour_max)
    if suppress_ties:
        # Only an earlier maximum of equal value suppresses a cell.
        earlier_max = ndimage.maximum_filter(
            np.where(keep, samples, 0.0), footprint=earlier, mode="constant", cval=0.0
        )
        keep &= samples > earlier_max

    maxima = RasterBuffer(accumulator.width, accumulator.height, accumulator.margin)
    m = accumulator.margin
    window = (slice(m, m + accumulator.height), slice(m, m + accumulator.width))
    maxima.interior[...] = np.where(keep, samples, 0.0)[window]
    logger.debug("Found {} maxima above {}", maxima.nonzero_count(), threshold)
    return maxima
