"""Turn Hough centroids into filtered line records."""

import math
from dataclasses import astuple, asdict, dataclass, fields

import numpy as np
from loguru import logger

_TOL = 1e-6


@dataclass(frozen=True)
class DetectedLine:
    """One detected line.

    ``r`` and ``theta`` are the continuous Hough parameters, ``slant`` the
    angle of the line normal (equal to ``theta``), ``(x1, y1)``-``(x2, y2)``
    the segment where the line crosses the image and ``width``/``height``
    that segment's extent.  ``strength`` is the summed cluster intensity.
    """

    r: float
    theta: float
    width: float
    height: float
    slant: float
    x1: float
    y1: float
    x2: float
    y2: float
    strength: float


LINE_DTYPE = np.dtype([(f.name, np.float64) for f in fields(DetectedLine)])


def line_endpoints(rho, theta, width, height):
    """Get the two points where a line leaves the box [0, width] x [0, height].

    Returns ``((x1, y1), (x2, y2))`` with ``x1 <= x2``, or None when the line
    misses the box.
    """
    a = math.cos(theta)
    b = math.sin(theta)
    points = []
    # Left x=0 and right x=width
    if abs(b) > _TOL:
        for x in (0.0, width):
            y = (rho - x * a) / b
            if -_TOL <= y <= height + _TOL:
                points.append((x, min(max(y, 0.0), height)))
    # Top y=0 and bottom y=height
    if abs(a) > _TOL:
        for y in (0.0, height):
            x = (rho - y * b) / a
            if -_TOL <= x <= width + _TOL:
                points.append((min(max(x, 0.0), width), y))
    if not points:
        return None
    # A line through a corner is found on two edges; keep the farthest pair.
    best = (points[0], points[0])
    best_distance = -1.0
    for i, p in enumerate(points):
        for q in points[i:]:
            distance = math.hypot(q[0] - p[0], q[1] - p[1])
            if distance > best_distance:
                best, best_distance = (p, q), distance
    return tuple(sorted(best))


def build_lines(centroids, space, slant_min=0.0, slant_max=math.pi, min_width=0.0, min_height=0.0):
    """Convert centroids to DetectedLine records, dropping those that fail the filters.

    The image extent is measured between pixel centres, i.e.
    ``[0, width - 1] x [0, height - 1]``.  Emission order follows the
    centroids.
    """
    lines = []
    for centroid in centroids:
        r = space.r_at(centroid.r)
        theta = space.theta_at(centroid.theta)
        ends = line_endpoints(r, theta, space.image_width - 1, space.image_height - 1)
        if ends is None:
            logger.debug("Line r={:.2f} theta={:.4f} misses the image", r, theta)
            continue
        (x1, y1), (x2, y2) = ends
        line = DetectedLine(
            r=r,
            theta=theta,
            width=abs(x2 - x1),
            height=abs(y2 - y1),
            slant=theta,
            x1=x1,
            y1=y1,
            x2=x2,
            y2=y2,
            strength=centroid.weight,
        )
        if not slant_min <= line.slant <= slant_max:
            continue
        if line.width < min_width or line.height < min_height:
            continue
        lines.append(line)
    logger.debug("Kept {} of {} lines", len(lines), len(centroids))
    return lines


def lines_to_records(lines):
    """Serialize lines as a list of dicts with named numeric fields."""
    return [asdict(line) for line in lines]


def lines_to_array(lines):
    """Serialize lines as a numpy structured array."""
    return np.array([astuple(line) for line in lines], dtype=LINE_DTYPE)
