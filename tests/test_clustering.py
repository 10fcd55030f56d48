"""Tests for maxima clustering."""

import numpy as np
import pytest

from houghlines.core import (
    ParameterOutOfRange,
    RasterBuffer,
    cluster_centroids,
    extract_clusters,
    label_clusters,
)


def maxima_from(rows, margin=1):
    return RasterBuffer.from_array(np.asarray(rows, dtype=float), margin=margin)


DIAMOND = [
    [0, 0, 0, 0, 0],
    [0, 0, 2, 0, 0],
    [0, 1, 4, 1, 0],
    [0, 0, 2, 0, 0],
]

SHIFTING = [
    [0, 1, 1, 0, 0],
    [0, 0, 1, 1, 0],
    [0, 0, 0, 1, 1],
]

WIDENING = [
    [0, 0, 0, 1, 1],
    [0, 1, 1, 1, 1],
    [1, 1, 1, 1, 0],
]


def test_single_pixel():
    """A lone maximum is its own centroid."""
    maxima = maxima_from([[0, 0, 0], [0, 0, 5]])
    (cluster,) = extract_clusters(maxima)
    assert cluster.pixel_count == 1
    centroid = cluster.centroid()
    assert (centroid.r, centroid.theta, centroid.weight) == (1.0, 2.0, 5.0)


def test_centroid_is_intensity_weighted():
    """Heavier pixels pull the centroid."""
    (centroid,) = cluster_centroids(maxima_from([[1, 3]]))
    assert centroid.r == 0.0
    assert centroid.theta == pytest.approx(0.75)


@pytest.mark.parametrize("rows", [DIAMOND, SHIFTING, WIDENING])
def test_convex_blob_is_one_cluster(rows):
    """Runs continue below the start, further right, or extend to the left."""
    maxima = maxima_from(rows)
    expected = int(np.count_nonzero(rows))
    clusters = extract_clusters(maxima)
    assert len(clusters) == 1
    assert clusters[0].pixel_count == expected
    assert maxima.nonzero_count() == 0


def test_diamond_centroid():
    """The symmetric diamond centres on its middle pixel."""
    (centroid,) = cluster_centroids(maxima_from(DIAMOND, margin=2))
    assert centroid.r == pytest.approx(2.0)
    assert centroid.theta == pytest.approx(2.0)
    assert centroid.weight == 10.0


def test_separate_blobs_in_closing_order():
    """Distinct blobs give distinct centroids, earliest closed first."""
    rows = [
        [1, 1, 0, 0, 0, 2],
        [1, 1, 0, 0, 0, 0],
        [0, 0, 0, 3, 0, 0],
    ]
    centroids = cluster_centroids(maxima_from(rows))
    assert [(c.r, c.theta) for c in centroids] == [(0.5, 0.5), (0.0, 5.0), (2.0, 3.0)]


@pytest.mark.parametrize("seed", range(5))
def test_every_pixel_consumed_once(seed):
    """Pixel counts add up to the number of maxima, whatever the shapes."""
    rng = np.random.default_rng(seed)
    rows = np.where(rng.random((15, 20)) < 0.3, rng.integers(1, 9, (15, 20)), 0)
    maxima = maxima_from(rows)
    clusters = extract_clusters(maxima)
    assert sum(c.pixel_count for c in clusters) == np.count_nonzero(rows)
    assert sum(c.weight for c in clusters) == pytest.approx(rows.sum())
    assert maxima.nonzero_count() == 0


def test_concave_blob_is_split_by_scan_but_not_by_labelling():
    """The single pass relies on convexity; labelling does not."""
    u_shape = [
        [1, 0, 1],
        [1, 1, 1],
    ]
    assert len(extract_clusters(maxima_from(u_shape))) == 2
    assert len(label_clusters(maxima_from(u_shape))) == 1


@pytest.mark.parametrize("rows", [DIAMOND, SHIFTING, WIDENING])
def test_label_matches_scan_on_convex_blobs(rows):
    """Both methods agree where the convexity assumption holds."""
    (scanned,) = cluster_centroids(maxima_from(rows), "scan")
    (labelled,) = cluster_centroids(maxima_from(rows), "label")
    assert labelled.r == pytest.approx(scanned.r)
    assert labelled.theta == pytest.approx(scanned.theta)
    assert labelled.weight == pytest.approx(scanned.weight)


def test_label_leaves_map_untouched():
    """Labelling does not consume its input."""
    maxima = maxima_from(DIAMOND)
    before = maxima.copy()
    (cluster,) = label_clusters(maxima)
    assert maxima == before
    assert cluster.pixel_count == 5


def test_label_connectivity():
    """Diagonal neighbours join only with 8-connectivity."""
    diagonal = [[1, 0], [0, 1]]
    assert len(label_clusters(maxima_from(diagonal), connectivity=8)) == 1
    assert len(label_clusters(maxima_from(diagonal), connectivity=4)) == 2
    with pytest.raises(ParameterOutOfRange):
        label_clusters(maxima_from(diagonal), connectivity=6)


def test_empty_map():
    """No maxima, no clusters."""
    assert cluster_centroids(RasterBuffer(4, 4, 1)) == []
    assert cluster_centroids(RasterBuffer(4, 4, 1), "label") == []


def test_unknown_method():
    with pytest.raises(ParameterOutOfRange):
        cluster_centroids(RasterBuffer(2, 2), "flood")
