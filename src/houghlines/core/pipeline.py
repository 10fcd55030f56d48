"""Run the full threshold -> Hough -> maxima -> clusters -> lines pipeline."""

from dataclasses import dataclass

from loguru import logger

from .clustering import cluster_centroids
from .config import HoughConfig
from .hough import HoughSpace, accumulate
from .image_loading import decode_image
from .line_detection import build_lines
from .maxima import find_maxima
from .raster import RasterBuffer
from .threshold import threshold_raster


@dataclass
class PipelineResult:
    """Every intermediate product of one pipeline invocation."""

    binary: RasterBuffer
    space: HoughSpace
    maxima: RasterBuffer
    centroids: list
    lines: list


def run_pipeline(image, config=None):
    """Detect lines in image, which is a RasterBuffer or anything decode_image accepts."""
    config = (config or HoughConfig()).validated()
    if not isinstance(image, RasterBuffer):
        image = decode_image(image)

    binary = threshold_raster(image, config.threshold)
    space = accumulate(
        binary,
        margin=config.margin,
        slant_min=config.slant_min,
        slant_max=config.slant_max,
        angle_bins=config.angle_bins,
    )
    maxima = find_maxima(
        space.raster,
        config.maxima_threshold,
        radius=config.maxima_radius,
        suppress_ties=config.suppress_ties,
    )
    # The scan consumes its input; keep the map intact for the caller.
    centroids = cluster_centroids(maxima.copy(), config.clustering)
    lines = build_lines(
        centroids,
        space,
        slant_min=config.slant_min,
        slant_max=config.slant_max,
        min_width=config.min_width,
        min_height=config.min_height,
    )
    logger.info("Detected {} lines in {}x{} image", len(lines), image.width, image.height)
    return PipelineResult(binary, space, maxima, centroids, lines)


def detect_lines(image, config=None):
    """Return the detected lines of image."""
    return run_pipeline(image, config).lines
