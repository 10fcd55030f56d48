"""Exceptions raised by the line detection stages."""


class HoughError(Exception):
    """Base class for all houghlines errors."""


class InvalidDimensions(HoughError, ValueError):
    """Raised when a raster is created with zero width or height."""

    def __init__(self, width, height):
        super().__init__(f"Invalid raster dimensions {width}x{height}")
        self.width = width
        self.height = height


class OutOfBounds(HoughError, IndexError):
    """Raised when a coordinate lies outside the logical raster extent."""

    def __init__(self, x, y, width, height):
        super().__init__(f"Coordinate ({x}, {y}) outside {width}x{height} raster")
        self.x = x
        self.y = y


class ParameterOutOfRange(HoughError, ValueError):
    """Raised in strict mode when a parameter lies outside its domain."""

    def __init__(self, name, value, low, high):
        super().__init__(f"{name}={value!r} outside [{low}, {high}]")
        self.name = name
        self.value = value
        self.low = low
        self.high = high


class DimensionMismatch(HoughError, ValueError):
    """Raised when chained stages are handed incompatible rasters."""


class MalformedRaster(HoughError, ValueError):
    """Raised when a raster's contents do not fit the stage it is passed to."""
