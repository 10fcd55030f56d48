"""Detection parameters and their YAML persistence."""

import math
from dataclasses import asdict, dataclass, fields, replace

import yaml
from loguru import logger

from .errors import ParameterOutOfRange

CLUSTERING_METHODS = ("scan", "label")


def clamp_parameter(name, value, low, high=math.inf, strict=False):
    """Clamp value into [low, high], warning (or raising when strict) if it was outside."""
    if low <= value <= high:
        return value
    if strict:
        raise ParameterOutOfRange(name, value, low, high)
    clamped = min(max(value, low), high)
    logger.warning("{}={} outside [{}, {}], using {}", name, value, low, high, clamped)
    return clamped


@dataclass
class HoughConfig:
    """Tunable inputs of the detection pipeline.

    Angles are in radians.  ``slant_min``/``slant_max`` bound the angle of
    the line normal: 0 is a vertical line, pi/2 a horizontal one.
    ``maxima_threshold`` and the minimum sizes are in votes and pixels.
    """

    threshold: float = 0.5
    margin: int = 1
    slant_min: float = 0.0
    slant_max: float = math.pi
    angle_bins: int = 180
    maxima_threshold: float = 10.0
    maxima_radius: int = 1
    suppress_ties: bool = True
    min_width: float = 0.0
    min_height: float = 0.0
    clustering: str = "scan"

    def validated(self, strict=False):
        """Return a copy with every field inside its domain."""
        slant_min = clamp_parameter("slant_min", float(self.slant_min), 0.0, math.pi, strict)
        slant_max = clamp_parameter("slant_max", float(self.slant_max), 0.0, math.pi, strict)
        if slant_min > slant_max:
            if strict:
                raise ParameterOutOfRange("slant_min", slant_min, 0.0, slant_max)
            logger.warning("slant_min > slant_max, swapping {} and {}", slant_min, slant_max)
            slant_min, slant_max = slant_max, slant_min
        clustering = self.clustering
        if clustering not in CLUSTERING_METHODS:
            if strict:
                raise ParameterOutOfRange("clustering", clustering, *CLUSTERING_METHODS)
            logger.warning("Unknown clustering method {!r}, using 'scan'", clustering)
            clustering = "scan"
        return replace(
            self,
            threshold=clamp_parameter("threshold", float(self.threshold), 0.0, 1.0, strict),
            margin=int(clamp_parameter("margin", int(self.margin), 0, strict=strict)),
            slant_min=slant_min,
            slant_max=slant_max,
            angle_bins=int(clamp_parameter("angle_bins", int(self.angle_bins), 1, strict=strict)),
            maxima_threshold=clamp_parameter(
                "maxima_threshold", float(self.maxima_threshold), 0.0, strict=strict
            ),
            maxima_radius=int(
                clamp_parameter("maxima_radius", int(self.maxima_radius), 1, strict=strict)
            ),
            suppress_ties=bool(self.suppress_ties),
            min_width=clamp_parameter("min_width", float(self.min_width), 0.0, strict=strict),
            min_height=clamp_parameter("min_height", float(self.min_height), 0.0, strict=strict),
            clustering=clustering,
        )


def save_config(config, filename="hough.yaml"):
    """Save detection parameters to YAML."""
    with open(filename, "w") as f:
        yaml.dump(asdict(config), f, sort_keys=False)


def load_config(filename="hough.yaml"):
    """Load detection parameters from YAML."""
    with open(filename, "r") as f:
        data = yaml.safe_load(f) or {}
    known = {f.name for f in fields(HoughConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys: {}", ", ".join(unknown))
    return HoughConfig(**{k: v for k, v in data.items() if k in known})
