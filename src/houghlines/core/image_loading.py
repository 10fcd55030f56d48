"""Decode images into grayscale rasters and encode rasters back to images."""

from pathlib import Path

import numpy as np
from PIL import Image
from scipy import ndimage
from skimage.color import rgb2gray, rgba2rgb
from skimage.util import img_as_float, img_as_ubyte

from .errors import MalformedRaster
from .raster import RasterBuffer


def _to_gray(source):
    if isinstance(source, (str, Path)):
        with Image.open(source) as img:
            return img_as_float(np.array(img.convert("L")))
    if isinstance(source, Image.Image):
        return img_as_float(np.array(source.convert("L")))
    array = np.asarray(source)
    if array.ndim == 3 and array.shape[-1] == 4:
        return rgb2gray(rgba2rgb(array))
    if array.ndim == 3 and array.shape[-1] == 3:
        return rgb2gray(array)
    if array.ndim == 2:
        return img_as_float(array)
    raise MalformedRaster(f"Cannot decode an image array of shape {array.shape}")


def decode_image(source, coarsen_factor=1, margin=0):
    """Load a path, PIL image or array as a [0, 1] grayscale raster, optionally coarsened."""
    gray = _to_gray(source)
    if coarsen_factor > 1:
        gray = ndimage.zoom(gray, 1 / coarsen_factor, order=1)
    return RasterBuffer.from_array(np.clip(gray, 0.0, 1.0), margin)


def encode_image(buffer, normalize=True):
    """Render the raster interior as an 8-bit grayscale PIL image.

    With ``normalize`` the samples are divided by their maximum, which makes
    accumulators and maxima maps viewable.
    """
    data = buffer.interior.astype(np.float64)
    if normalize and data.max() > 0:
        data = data / data.max()
    return Image.fromarray(img_as_ubyte(np.clip(data, 0.0, 1.0)))


def save_raster_image(buffer, path, normalize=True):
    """Write the raster interior to an image file."""
    encode_image(buffer, normalize).save(path)
