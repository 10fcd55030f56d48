"""Core package for Hough line detection."""

from .errors import (
    HoughError,
    InvalidDimensions,
    OutOfBounds,
    ParameterOutOfRange,
    DimensionMismatch,
    MalformedRaster,
)
from .raster import RasterBuffer
from .config import HoughConfig, clamp_parameter, save_config, load_config
from .threshold import threshold_raster
from .hough import HoughSpace, accumulate
from .maxima import find_maxima
from .clustering import Cluster, Centroid, extract_clusters, label_clusters, cluster_centroids
from .line_detection import DetectedLine, line_endpoints, build_lines, lines_to_records, lines_to_array
from .image_loading import decode_image, encode_image, save_raster_image
from .pipeline import PipelineResult, run_pipeline, detect_lines
