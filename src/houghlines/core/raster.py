"""Zero-padded single-channel raster shared by all stages."""

import numpy as np
from loguru import logger

from .errors import DimensionMismatch, InvalidDimensions, OutOfBounds


class RasterBuffer:
    """A width x height grid of float32 samples surrounded by a zero margin.

    Samples are stored row-major in ``samples`` with shape
    ``(height + 2 * margin, width + 2 * margin)``.  ``get`` and ``set`` take
    logical coordinates, i.e. ``(0, 0)`` is the first sample inside the margin.
    Only the Hough and maxima stages are expected to read the padding.
    """

    def __init__(self, width, height, margin=0):
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise InvalidDimensions(width, height)
        if margin < 0:
            logger.warning("Negative margin {} clamped to 0", margin)
            margin = 0
        self.width = width
        self.height = height
        self.margin = int(margin)
        self.samples = np.zeros(
            (height + 2 * self.margin, width + 2 * self.margin), dtype=np.float32
        )

    @classmethod
    def from_array(cls, array, margin=0):
        """Wrap a 2-D array, copying it into the interior of a new buffer."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise DimensionMismatch(f"Expected a 2-D array, got shape {array.shape}")
        height, width = array.shape
        buffer = cls(width, height, margin)
        buffer.interior[...] = array
        return buffer

    @property
    def shape(self):
        """Logical (height, width), margin excluded."""
        return self.height, self.width

    @property
    def interior(self):
        """Writable view of the samples inside the margin."""
        m = self.margin
        return self.samples[m:m + self.height, m:m + self.width]

    def _check(self, x, y):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(x, y, self.width, self.height)

    def get(self, x, y):
        """Return the sample at logical column x, row y."""
        self._check(x, y)
        return float(self.samples[y + self.margin, x + self.margin])

    def set(self, x, y, value):
        """Store value at logical column x, row y."""
        self._check(x, y)
        self.samples[y + self.margin, x + self.margin] = value

    def copy(self):
        """Return an independent buffer with the same contents."""
        clone = RasterBuffer(self.width, self.height, self.margin)
        clone.samples[...] = self.samples
        return clone

    def nonzero_count(self):
        """Number of nonzero samples, padding included."""
        return int(np.count_nonzero(self.samples))

    def same_shape(self, other):
        """True when other has identical width, height and margin."""
        return (
            self.width == other.width
            and self.height == other.height
            and self.margin == other.margin
        )

    def __eq__(self, other):
        if not isinstance(other, RasterBuffer):
            return NotImplemented
        return self.same_shape(other) and np.array_equal(self.samples, other.samples)

    def __repr__(self):
        return f"RasterBuffer(width={self.width}, height={self.height}, margin={self.margin})"
