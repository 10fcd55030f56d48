"""Accumulate a (r, theta) parameter space from the on-pixels of a binary raster.

Discretisation used by every consumer of the accumulator:

* ``theta_step = pi / angle_bins``; column ``c`` holds angle
  ``(first_angle + c) * theta_step`` where ``first_angle`` is the first step
  index not below ``slant_min``.
* ``r = x * cos(theta) + y * sin(theta)`` in logical input coordinates, one
  row per unit of ``r``.  Row ``round(r) + r_offset`` (halves away from zero,
  as ``skimage.transform.hough_line`` rounds) with
  ``r_offset = ceil(hypot(width, height))``, giving ``2 * r_offset + 1`` rows.
"""

import math

import numpy as np
from loguru import logger
from skimage.transform import hough_line

from .config import clamp_parameter
from .errors import MalformedRaster
from .raster import RasterBuffer

_EPS = 1e-9


class HoughSpace:
    """Accumulator raster plus the convention needed to invert its indices."""

    def __init__(self, raster, image_width, image_height, theta_step, first_angle, r_offset):
        self.raster = raster
        self.image_width = image_width
        self.image_height = image_height
        self.theta_step = theta_step
        self.first_angle = first_angle
        self.r_offset = r_offset

    @property
    def n_angles(self):
        return self.raster.width

    @property
    def angles(self):
        """Angle in radians of every column."""
        return (self.first_angle + np.arange(self.n_angles)) * self.theta_step

    def theta_at(self, column):
        """Continuous theta of a (possibly fractional) logical column index."""
        return (self.first_angle + column) * self.theta_step

    def r_at(self, row):
        """Continuous r of a (possibly fractional) logical row index."""
        return row - self.r_offset

    def row_of(self, r):
        """Row holding r, rounding halves away from zero like the accumulator."""
        return int(math.copysign(math.floor(abs(r) + 0.5), r)) + self.r_offset

    def column_of(self, theta):
        return int(math.floor(theta / self.theta_step + 0.5)) - self.first_angle

    def __repr__(self):
        return (
            f"HoughSpace(angles={self.n_angles}, rows={self.raster.height}, "
            f"theta_step={self.theta_step:.6f}, first_angle={self.first_angle}, "
            f"r_offset={self.r_offset})"
        )


def angle_range(slant_min, slant_max, angle_bins):
    """Return the [first, stop) step indices covering [slant_min, slant_max)."""
    step = math.pi / angle_bins
    first = min(math.ceil(slant_min / step - _EPS), angle_bins - 1)
    stop = min(math.ceil(slant_max / step - _EPS), angle_bins)
    if stop <= first:
        stop = first + 1
    return first, stop


def accumulate(binary, margin=1, slant_min=0.0, slant_max=math.pi, angle_bins=180):
    """Vote every on-pixel of a binary raster into a HoughSpace.

    Each sample equal to 1.0 adds one vote to one row of every accumulated
    angle, so the accumulator holds ``on_pixels * n_angles`` votes in total.
    An empty input produces an all-zero accumulator.
    """
    interior = binary.interior
    if not np.all((interior == 0.0) | (interior == 1.0)):
        raise MalformedRaster("Hough accumulation expects a binarized raster")
    margin = int(clamp_parameter("margin", int(margin), 0))
    angle_bins = int(clamp_parameter("angle_bins", int(angle_bins), 1))
    slant_min = clamp_parameter("slant_min", float(slant_min), 0.0, math.pi)
    slant_max = clamp_parameter("slant_max", float(slant_max), slant_min, math.pi)

    theta_step = math.pi / angle_bins
    first, stop = angle_range(slant_min, slant_max, angle_bins)
    thetas = (first + np.arange(stop - first)) * theta_step
    hspace, _, distances = hough_line(interior == 1.0, theta=thetas)
    r_offset = (len(distances) - 1) // 2
    raster = RasterBuffer(stop - first, len(distances), margin)
    raster.interior[...] = hspace
    space = HoughSpace(raster, binary.width, binary.height, theta_step, first, r_offset)
    logger.debug("Accumulated {} on-pixels into {}", int(np.count_nonzero(interior)), space)
    return space
