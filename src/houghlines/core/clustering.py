"""Condense blobs of adjacent maxima into one centroid per line."""

from dataclasses import dataclass

import numpy as np
from loguru import logger
from scipy import ndimage

from .errors import ParameterOutOfRange


@dataclass(frozen=True)
class Centroid:
    """Intensity weighted mean position of a cluster in logical raster indices."""

    r: float
    theta: float
    weight: float = 0.0


@dataclass
class Cluster:
    """Running sums of the pixels gathered into one blob."""

    sum_r: float = 0.0
    sum_theta: float = 0.0
    weight: float = 0.0
    pixel_count: int = 0

    def add(self, row, column, value):
        value = float(value)
        self.sum_r += row * value
        self.sum_theta += column * value
        self.weight += value
        self.pixel_count += 1

    def centroid(self):
        return Centroid(self.sum_r / self.weight, self.sum_theta / self.weight, self.weight)


def _scan_cluster(samples, row, column, margin):
    """Consume the convex blob whose first pixel in raster order is (row, column).

    Each row of the blob is read as one run, left to right, zeroing every
    sample on the way.  The next row continues the blob if the sample under
    the run's start is set (the run is then extended to the left first) or,
    failing that, if any sample under the rest of the run is set.  Pixels in
    rows above, and to the left in the current row, must already be consumed.
    """
    rows, columns = samples.shape
    cluster = Cluster()
    start = column
    while True:
        end = start
        while end < columns and samples[row, end] != 0:
            cluster.add(row - margin, end - margin, samples[row, end])
            samples[row, end] = 0
            end += 1
        row += 1
        if row >= rows:
            break
        if samples[row, start] != 0:
            while start > 0 and samples[row, start - 1] != 0:
                start -= 1
            continue
        below = start + 1
        while below < end and samples[row, below] == 0:
            below += 1
        if below == end:
            break
        start = below
    return cluster


def extract_clusters(maxima):
    """Group the maxima map into clusters in a single forward raster scan.

    The map is consumed: every visited sample is set to zero, so no pixel is
    counted twice and the sum of ``pixel_count`` equals the number of
    nonzero input samples.  Clusters are returned in the order they close.

    Blobs are assumed convex.  A concave blob, or two blobs that only touch
    diagonally, can be split into several clusters or merged; use
    :func:`label_clusters` when that matters.
    """
    samples = maxima.samples
    columns = samples.shape[1]
    clusters = []
    for index in np.flatnonzero(samples):
        row, column = divmod(int(index), columns)
        if samples[row, column] == 0:
            continue
        clusters.append(_scan_cluster(samples, row, column, maxima.margin))
    logger.debug("Scan extracted {} clusters", len(clusters))
    return clusters


def label_clusters(maxima, connectivity=8):
    """Group the maxima map with two-pass connected component labelling.

    Unlike :func:`extract_clusters` this makes no convexity assumption and
    leaves the map untouched.  Clusters are ordered by their first pixel in
    raster order.
    """
    if connectivity not in (4, 8):
        raise ParameterOutOfRange("connectivity", connectivity, 4, 8)
    samples = maxima.samples.astype(np.float64)
    struct_elem = ndimage.generate_binary_structure(2, 2 if connectivity == 8 else 1)
    labeled, num_features = ndimage.label(samples != 0, structure=struct_elem)
    if num_features == 0:
        return []
    index = np.arange(1, num_features + 1)
    rows, columns = np.indices(samples.shape)
    weights = ndimage.sum_labels(samples, labeled, index)
    sum_r = ndimage.sum_labels(samples * (rows - maxima.margin), labeled, index)
    sum_theta = ndimage.sum_labels(samples * (columns - maxima.margin), labeled, index)
    counts = np.bincount(labeled.ravel(), minlength=num_features + 1)[1:]
    clusters = [
        Cluster(float(r), float(t), float(w), int(n))
        for r, t, w, n in zip(sum_r, sum_theta, weights, counts)
    ]
    logger.debug("Labelling found {} clusters", len(clusters))
    return clusters


def cluster_centroids(maxima, method="scan"):
    """Return the centroid of every cluster in the maxima map."""
    if method == "scan":
        clusters = extract_clusters(maxima)
    elif method == "label":
        clusters = label_clusters(maxima)
    else:
        raise ParameterOutOfRange("method", method, "scan", "label")
    return [cluster.centroid() for cluster in clusters]
